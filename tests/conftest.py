# tests/conftest.py
from typing import Dict, List, Optional, Set
import pytest
from repository.kv_store import KeyNotFoundError
from repository.revision_repository import RevisionRepository
from service.revision_service import RevisionService
from util.errors import StoreOperationError


class InMemoryStore:
    """Dict-backed KeyValueStore; `fail_deletes` makes delete() of those keys fail."""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}
        self.calls: List[tuple] = []
        self.fail_deletes: Set[str] = set()
        self.fail_keys: bool = False

    async def keys(self, prefix: str) -> List[str]:
        self.calls.append(("keys", prefix))
        if self.fail_keys:
            raise StoreOperationError("keys", prefix)
        found = sorted(k for k in self.data if k.startswith(prefix))
        if not found:
            raise KeyNotFoundError(prefix)
        return found

    async def get(self, key: str) -> Optional[str]:
        self.calls.append(("get", key))
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.calls.append(("set", key, value))
        self.data[key] = value

    async def delete(self, key: str, recurse: bool = False) -> None:
        self.calls.append(("delete", key, recurse))
        if key in self.fail_deletes:
            raise StoreOperationError("delete", key)
        self.data.pop(key, None)
        if recurse:
            for k in [k for k in self.data if k.startswith(f"{key}/")]:
                del self.data[k]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(store: InMemoryStore) -> RevisionService:
    return RevisionService(RevisionRepository(store))


@pytest.fixture
def asset(tmp_path):
    path = tmp_path / "index.html"
    path.write_text("<html>v1</html>", encoding="utf-8")
    return path
