"""Core infrastructure: configuration, logging, credentials and exceptions."""
