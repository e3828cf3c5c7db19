# service/revision_service.py
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional
from model.revision import FetchRevisionsResult, RevisionRecord
from repository.revision_repository import RevisionRepository
from util import functions
from util.errors import (
    AssetReadError,
    ConfigurationError,
    MissingRevisionKeyError,
    RevisionEvictionError,
    RevisionExistsError,
    UnknownRevisionError,
)
from util.timing import timed

logger = logging.getLogger(__name__)


class RevisionService:
    """
    Revision lifecycle for one store: upload, trim, activate, list.

    No locking: two uploads into the same namespace race on the recent list.
    """

    def __init__(self, revisions: RevisionRepository) -> None:
        self._revisions = revisions

    async def upload(
        self,
        namespace: str,
        revision_key: str,
        *,
        allow_overwrite: bool,
        max_revisions: int,
        metadata: Optional[Mapping[str, Any]],
        file_path: str,
    ) -> None:
        """
        Store the asset at `file_path` as `revision_key`, record it as the most
        recent revision, then trim the history down to `max_revisions`.
        """
        self._check_revision_key(revision_key)
        logger.debug("revision.upload.start namespace=%s path=%s", namespace, file_path)
        with timed(logger, "revision.upload", namespace=namespace, key=revision_key):
            if not allow_overwrite and await self._revisions.revision_exists(
                namespace, revision_key
            ):
                logger.warning(
                    "revision.upload.exists namespace=%s key=%s", namespace, revision_key
                )
                raise RevisionExistsError()

            content = self._read_asset(file_path)
            await self._revisions.put_revision(namespace, revision_key, content)
            await self._revisions.put_metadata(namespace, revision_key, metadata or {})
            await self._add_to_recent(namespace, revision_key)
            await self.trim(namespace, max_revisions)

        logger.info("revision.uploaded namespace=%s key=%s", namespace, revision_key)

    @staticmethod
    def _check_revision_key(revision_key: str) -> None:
        # The recent list is comma-joined, so a key may not contain a comma
        if not revision_key or "," in revision_key:
            raise ConfigurationError(
                "revisionKey", f"{revision_key!r} must be non-empty and contain no ','"
            )

    @staticmethod
    def _read_asset(file_path: str) -> str:
        try:
            return functions.read_text_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("revision.asset.read_error path=%s err=%s", file_path, type(e).__name__)
            raise AssetReadError(file_path) from e

    async def _add_to_recent(self, namespace: str, revision_key: str) -> None:
        keys = await self._revisions.recent_revisions(namespace)
        if revision_key not in keys:
            keys.insert(0, revision_key)
        await self._revisions.set_recent_revisions(namespace, keys)

    async def trim(self, namespace: str, max_revisions: int) -> List[str]:
        """
        Keep the first `max_revisions` keys and delete the rest.

        The shortened list is written before any content is deleted, so a crash
        mid-trim only leaves unreferenced revisions behind. Every eviction is
        attempted; failures are raised together afterwards.
        """
        keys = await self._revisions.recent_revisions(namespace)
        if len(keys) <= max_revisions:
            return []

        remaining, overflow = keys[:max_revisions], keys[max_revisions:]
        with timed(logger, "revision.trim", namespace=namespace, evicted=len(overflow)):
            await self._revisions.set_recent_revisions(namespace, remaining)
            results = await asyncio.gather(
                *(self._revisions.delete_revision(namespace, k) for k in overflow),
                return_exceptions=True,
            )

        failures: Dict[str, BaseException] = {
            k: r for k, r in zip(overflow, results) if isinstance(r, BaseException)
        }
        if failures:
            logger.error(
                "revision.trim.failed namespace=%s keys=%s",
                namespace,
                ",".join(failures),
            )
            raise RevisionEvictionError(failures)
        logger.info("revision.trimmed namespace=%s evicted=%s", namespace, ",".join(overflow))
        return overflow

    async def activate(self, namespace: str, revision_key: Optional[str]) -> None:
        if not revision_key:
            raise MissingRevisionKeyError()

        logger.debug("revision.activate.start namespace=%s key=%s", namespace, revision_key)
        # An absent list reads as empty, so a fresh namespace lands here too
        recent = await self._revisions.recent_revisions(namespace)
        if revision_key not in recent:
            logger.warning(
                "revision.activate.unknown namespace=%s key=%s", namespace, revision_key
            )
            raise UnknownRevisionError(revision_key)

        await self._revisions.set_active_revision(namespace, revision_key)
        logger.info("revision.activated namespace=%s key=%s", namespace, revision_key)

    async def fetch_revisions(self, namespace: str) -> FetchRevisionsResult:
        recent, active = await asyncio.gather(
            self._revisions.recent_revisions(namespace),
            self._revisions.active_revision(namespace),
        )
        return FetchRevisionsResult(
            revisions=[RevisionRecord(revision=k, active=k == active) for k in recent]
        )
