# util/enums.py
from enum import Enum
from typing import NamedTuple


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Backend(str, Enum):
    CONSUL = "consul"
    REDIS = "redis"


class ErrorInfo(NamedTuple):
    message: str
    code: str


class ErrorMessage(Enum):
    REVISION_EXISTS = ErrorInfo("Revision already exists", "revision_exists")
    ASSET_READ = ErrorInfo("No file found at `{path}`", "asset_read")
    MISSING_REVISION_KEY = ErrorInfo(
        "Revision key to activate must be provided", "missing_revision_key"
    )
    UNKNOWN_REVISION = ErrorInfo("Unknown revision key", "unknown_revision")
    STORE_OPERATION = ErrorInfo("Store {op} failed for `{key}`", "store_operation")
    EVICTION_FAILED = ErrorInfo(
        "Failed to delete evicted revisions: {keys}", "eviction_failed"
    )
    INVALID_CONFIG = ErrorInfo("Invalid config `{option}`: {reason}", "invalid_config")
