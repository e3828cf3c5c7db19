# plugin.py
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Union
from pydantic import ValidationError
from config.defaults import resolve_options
from config.store import build_store, close_store
from model.context import DeployContext
from model.options import PluginOptions
from repository.kv_store import KeyValueStore
from repository.revision_repository import RevisionRepository
from service.revision_service import RevisionService
from util.errors import AppError, ConfigurationError
from util.logger import init_logger

logger = logging.getLogger(__name__)

ContextLike = Union[DeployContext, Mapping[str, Any]]


def _as_context(context: ContextLike) -> DeployContext:
    if isinstance(context, DeployContext):
        return context
    try:
        return DeployContext.model_validate(dict(context))
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(x) for x in err.get("loc", [])) or "context"
        raise ConfigurationError(field, err.get("msg", "invalid value")) from e


class KvIndexPlugin:
    """
    Deploy-pipeline hooks for an index file kept in a key-value store.

    Every hook resolves its options from the context it is given; nothing but
    the store client created by setup() is kept between hooks.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._owned_store: KeyValueStore | None = None

    @contextmanager
    def _reporting(self, hook: str) -> Iterator[None]:
        try:
            yield
        except AppError as e:
            logger.error(
                "plugin.%s.failed plugin=%s code=%s message=%s",
                hook,
                self.name,
                e.code,
                e.message,
            )
            raise

    def configure(self, context: ContextLike) -> PluginOptions:
        with self._reporting("configure"):
            return resolve_options(_as_context(context), self.name)

    def _service(self, options: PluginOptions) -> RevisionService:
        store = options.storeClient
        if store is None:
            store = self._owned_store
        if store is None:
            raise ConfigurationError("storeClient", "no store client, run setup first")
        repo = RevisionRepository(
            store,
            recent_token=options.recentRevisionsToken,
            active_token=options.activeRevisionToken,
        )
        return RevisionService(repo)

    async def setup(self, context: ContextLike) -> dict:
        init_logger()
        options = self.configure(context)
        with self._reporting("setup"):
            client = build_store(options)
        if self._owned_store is not None:
            await close_store(self._owned_store)
        self._owned_store = client
        return {"storeClient": client}

    async def upload(self, context: ContextLike) -> None:
        options = self.configure(context)
        logger.info("plugin.upload path=%s", options.file_path)
        with self._reporting("upload"):
            await self._service(options).upload(
                options.namespaceToken,
                options.revisionKey,
                allow_overwrite=options.allowOverwrite,
                max_revisions=options.maxRevisions,
                metadata=options.metadata,
                file_path=options.file_path,
            )

    async def activate(self, context: ContextLike) -> None:
        options = self.configure(context)
        logger.info(
            "plugin.activate key=%s namespace=%s",
            options.revisionKeyToActivate,
            options.namespaceToken,
        )
        with self._reporting("activate"):
            await self._service(options).activate(
                options.namespaceToken, options.revisionKeyToActivate
            )

    async def fetch_revisions(self, context: ContextLike) -> dict:
        options = self.configure(context)
        with self._reporting("fetch_revisions"):
            result = await self._service(options).fetch_revisions(
                options.namespaceToken
            )
        return result.model_dump()

    async def teardown(self, context: ContextLike) -> None:
        if self._owned_store is not None:
            await close_store(self._owned_store)
            self._owned_store = None


def create_deploy_plugin(name: str = "kv-index") -> KvIndexPlugin:
    return KvIndexPlugin(name)
