# model/options.py
import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field
from util.enums import Backend


class PluginOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, coerce_numbers_to_str=True)

    # Store connection
    backend: Backend = Backend.CONSUL
    host: str = "localhost"
    port: int = 8500
    secure: bool = True
    redisUrl: str = "redis://localhost:6379/0"

    # Asset
    filePattern: str = "index.html"
    distDir: str = "tmp/deploy-dist"

    # Revision bookkeeping
    revisionKey: str = "missing-revision-key"
    namespaceToken: str = "missing-namespace"
    recentRevisionsToken: str = "recent-revisions"
    activeRevisionToken: str = "active-revision"
    revisionKeyToActivate: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    allowOverwrite: bool = True
    maxRevisions: int = 10

    storeClient: Any = None

    @property
    def file_path(self) -> str:
        return os.path.join(self.distDir, self.filePattern)
