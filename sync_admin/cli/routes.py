"""
Request Routes.

Maps each command onto the request it issues. Builders are pure functions so
the path, query and form body of every command can be checked without a
network. Every user-supplied identifier is percent-encoded exactly once here;
the HTTP client never re-encodes it.
"""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote

DEFAULT_RESYNC_LIMIT = 10
DEFAULT_RESYNC_OFFSET = 0

DOT_SEGMENTS = (".", "..")


@dataclass(frozen=True)
class RequestDescriptor:
    """Method, path and parameters of one API call."""

    method: str
    path: str
    params: dict[str, Optional[str]] = field(default_factory=dict)
    data: Optional[dict[str, Optional[str]]] = None


def escape_segment(value: str) -> str:
    """
    Percent-encode one path segment, including any '/'.

    Dot-only segments are encoded too, otherwise URL normalization would
    resolve "." and ".." against the parent path.
    """
    encoded = quote(value, safe="")
    if encoded in DOT_SEGMENTS:
        return encoded.replace(".", "%2E")
    return encoded


def _installation_path(installation_id: str, *suffix: str) -> str:
    return "/".join(["/api", escape_segment(installation_id), *suffix])


def installation_info(installation_id: str) -> RequestDescriptor:
    return RequestDescriptor("GET", _installation_path(installation_id))


def repo_sync_state(installation_id: str, jira_host: str) -> RequestDescriptor:
    return RequestDescriptor(
        "GET",
        _installation_path(installation_id, "repoSyncState.json"),
        params={"jiraHost": jira_host},
    )


def sync(installation_id: str, jira_host: str, reset: bool = False) -> RequestDescriptor:
    """Incremental sync, or a full resync from scratch when reset is set."""
    return RequestDescriptor(
        "POST",
        _installation_path(installation_id, "sync"),
        data={"jiraHost": jira_host, "resetType": "full" if reset else None},
    )


def migrate(installation_id: str, jira_host: str) -> RequestDescriptor:
    return RequestDescriptor(
        "POST",
        _installation_path(installation_id, "migrate"),
        data={"jiraHost": jira_host},
    )


def jira_lookup(key_or_host: str) -> RequestDescriptor:
    return RequestDescriptor("GET", f"/api/jira/{escape_segment(key_or_host)}")


def jira_uninstall(client_key: str, force: bool = False) -> RequestDescriptor:
    return RequestDescriptor(
        "POST",
        f"/api/jira/{escape_segment(client_key)}/uninstall",
        data={"force": "true" if force else "false"},
    )


def resync_failed(
    limit: int = DEFAULT_RESYNC_LIMIT,
    offset: int = DEFAULT_RESYNC_OFFSET,
) -> RequestDescriptor:
    return RequestDescriptor(
        "POST",
        "/api/resyncFailed",
        data={"limit": str(limit), "offset": str(offset)},
    )
