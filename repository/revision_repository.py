# repository/revision_repository.py
import json
from typing import Any, List, Mapping, Optional
from repository import namespaces
from repository.kv_store import KeyNotFoundError, KeyValueStore
from util import functions


class RevisionRepository:
    """
    Namespace-scoped view of the key layout:
      <ns>/revisions/<key>            asset content
      <ns>/revisions/<key>/metadata   JSON metadata
      <ns>/<recent token>             comma-joined keys, most-recent-first
      <ns>/<active token>             active revision key
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        recent_token: str = namespaces.RECENT_REVISIONS,
        active_token: str = namespaces.ACTIVE_REVISION,
    ) -> None:
        self._store = store
        self._recent_token = recent_token
        self._active_token = active_token

    # ---------------- Revisions ----------------

    async def revision_exists(self, namespace: str, revision: str) -> bool:
        key = namespaces.revision_key(namespace, revision)
        try:
            found = await self._store.keys(key)
        except KeyNotFoundError:
            return False
        # keys() is a prefix match: "a" also lists "ab" and "a/metadata"
        return key in found

    async def put_revision(self, namespace: str, revision: str, content: str) -> None:
        await self._store.set(namespaces.revision_key(namespace, revision), content)

    async def put_metadata(
        self, namespace: str, revision: str, metadata: Mapping[str, Any]
    ) -> None:
        payload = json.dumps(dict(metadata), sort_keys=True, default=str)
        await self._store.set(namespaces.metadata_key(namespace, revision), payload)

    async def delete_revision(self, namespace: str, revision: str) -> None:
        # Recursive: takes the metadata child with it
        await self._store.delete(
            namespaces.revision_key(namespace, revision), recurse=True
        )

    # ---------------- Recent list / active pointer ----------------

    async def recent_revisions(self, namespace: str) -> List[str]:
        raw = await self._store.get(namespaces.token_key(namespace, self._recent_token))
        return functions.split_revision_list(raw)

    async def set_recent_revisions(self, namespace: str, revisions: List[str]) -> None:
        await self._store.set(
            namespaces.token_key(namespace, self._recent_token),
            functions.join_revision_list(revisions),
        )

    async def active_revision(self, namespace: str) -> Optional[str]:
        raw = await self._store.get(namespaces.token_key(namespace, self._active_token))
        return raw or None

    async def set_active_revision(self, namespace: str, revision: str) -> None:
        await self._store.set(
            namespaces.token_key(namespace, self._active_token), revision
        )
