# repository/namespaces.py
from typing import Final

REVISIONS: Final[str] = "revisions"
METADATA: Final[str] = "metadata"

RECENT_REVISIONS: Final[str] = "recent-revisions"
ACTIVE_REVISION: Final[str] = "active-revision"


def revision_key(namespace: str, revision: str) -> str:
    return f"{namespace}/{REVISIONS}/{revision}"


def metadata_key(namespace: str, revision: str) -> str:
    return f"{revision_key(namespace, revision)}/{METADATA}"


def token_key(namespace: str, token: str) -> str:
    # e.g. foo/recent-revisions, foo/active-revision
    return f"{namespace}/{token}"
