"""
CLI Client Module.

Command-line client built with Typer for the integration-management API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the API
- Commands call the API via HTTP (httpx) with a personal bearer token
- Responses are rendered as JSON (jq when available, else Rich)
"""
