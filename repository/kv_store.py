# repository/kv_store.py
from typing import List, Optional, Protocol, runtime_checkable


class KeyNotFoundError(LookupError):
    """The store holds nothing under the requested prefix."""

    def __init__(self, prefix: str) -> None:
        super().__init__(prefix)
        self.prefix = prefix


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Capability over a hierarchical, '/'-separated key namespace.

    - keys(prefix): every key starting with `prefix`; KeyNotFoundError when none.
    - get(key): the value, or None when absent.
    - delete(key, recurse=True) also removes every key under `key`.
    Transport failures surface as util.errors.StoreOperationError.
    """

    async def keys(self, prefix: str) -> List[str]: ...

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str, recurse: bool = False) -> None: ...
