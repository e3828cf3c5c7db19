# config/defaults.py
import logging
from typing import Any, Callable, Dict, Final, Union
from pydantic import ValidationError
from config.settings import settings
from model.context import DeployContext
from model.options import PluginOptions
from util.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Flow: every option is a literal or a function of the deploy context.
OptionValue = Union[Any, Callable[[DeployContext], Any]]


def _dist_dir(context: DeployContext) -> str:
    return context.distDir or "tmp/deploy-dist"


def _revision_key(context: DeployContext) -> str:
    data = context.revisionData or {}
    return data.get("revisionKey") or "missing-revision-key"


def _namespace(context: DeployContext) -> str:
    return context.project or "missing-namespace"


def _revision_to_activate(context: DeployContext) -> str | None:
    return context.commandOptions.get("revision")


def _metadata(context: DeployContext) -> dict:
    return dict(context.revisionData or {})


def _store_client(context: DeployContext) -> Any:
    return context.storeClient


DEFAULT_CONFIG: Final[Dict[str, OptionValue]] = {
    "backend": lambda _ctx: settings.KV_BACKEND,
    "host": "localhost",
    "port": 8500,
    "secure": True,
    "redisUrl": lambda _ctx: settings.REDIS_URL,
    "filePattern": "index.html",
    "distDir": _dist_dir,
    "revisionKey": _revision_key,
    "namespaceToken": _namespace,
    "recentRevisionsToken": "recent-revisions",
    "activeRevisionToken": "active-revision",
    "revisionKeyToActivate": _revision_to_activate,
    "metadata": _metadata,
    "allowOverwrite": True,
    "maxRevisions": 10,
    "storeClient": _store_client,
}


def resolve_value(value: OptionValue, context: DeployContext) -> Any:
    return value(context) if callable(value) else value


def resolve_options(context: DeployContext, plugin_name: str) -> PluginOptions:
    """
    Resolve every option once, host config first, then the default.
    Options the host did not configure are logged at DEBUG with their value.
    """
    configured = context.config.get(plugin_name, {})
    resolved: Dict[str, Any] = {}
    for name, default in DEFAULT_CONFIG.items():
        if name in configured:
            resolved[name] = resolve_value(configured[name], context)
            continue
        resolved[name] = resolve_value(default, context)
        if name != "storeClient":
            logger.debug(
                "config.default plugin=%s option=%s value=%r",
                plugin_name,
                name,
                resolved[name],
            )

    try:
        options = PluginOptions(**resolved)
    except ValidationError as e:
        err = e.errors()[0]
        option = ".".join(str(x) for x in err.get("loc", [])) or "?"
        raise ConfigurationError(option, err.get("msg", "invalid value")) from e

    if options.maxRevisions < 1:
        raise ConfigurationError("maxRevisions", "must be a positive integer")
    return options
