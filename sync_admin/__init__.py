"""
sync-admin.

Command-line client for the integration-management API. Staff use it to
inspect installations and trigger or repair repository syncs.
"""

__version__ = "0.1.0"
