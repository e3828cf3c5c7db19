# util/errors.py
from typing import Mapping, Optional
from util.enums import ErrorMessage


class AppError(Exception):
    # Flow: raise AppError to short-circuit a hook with a typed code & message.
    def __init__(self, message: str, code: str = "app_error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class RevisionExistsError(AppError):
    def __init__(self) -> None:
        info = ErrorMessage.REVISION_EXISTS.value
        super().__init__(info.message, info.code)


class AssetReadError(AppError):
    def __init__(self, path: str) -> None:
        info = ErrorMessage.ASSET_READ.value
        super().__init__(info.message.format(path=path), info.code)
        self.path = path


class MissingRevisionKeyError(AppError):
    def __init__(self) -> None:
        info = ErrorMessage.MISSING_REVISION_KEY.value
        super().__init__(info.message, info.code)


class UnknownRevisionError(AppError):
    def __init__(self, revision_key: Optional[str] = None) -> None:
        info = ErrorMessage.UNKNOWN_REVISION.value
        super().__init__(info.message, info.code)
        self.revision_key = revision_key


class StoreOperationError(AppError):
    def __init__(
        self, op: str, key: str, cause: Optional[BaseException] = None
    ) -> None:
        info = ErrorMessage.STORE_OPERATION.value
        message = info.message.format(op=op, key=key)
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, info.code)
        self.op = op
        self.key = key


class RevisionEvictionError(StoreOperationError):
    """Raised after every eviction was attempted and at least one failed."""

    def __init__(self, failures: Mapping[str, BaseException]) -> None:
        info = ErrorMessage.EVICTION_FAILED.value
        AppError.__init__(
            self, info.message.format(keys=", ".join(failures)), info.code
        )
        self.op = "delete"
        self.key = ",".join(failures)
        self.failures = dict(failures)


class ConfigurationError(AppError):
    def __init__(self, option: str, reason: str) -> None:
        info = ErrorMessage.INVALID_CONFIG.value
        super().__init__(info.message.format(option=option, reason=reason), info.code)
        self.option = option
