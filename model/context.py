# model/context.py
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeployContext(BaseModel):
    """
    What the deploy host hands to every hook.

    Only the fields option defaults read from are typed; anything else the host
    carries along is kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    distDir: str | None = None
    revisionData: dict[str, Any] | None = None
    project: str | None = None
    commandOptions: dict[str, Any] = Field(default_factory=dict)
    # Per-plugin config, keyed by plugin name
    config: dict[str, dict[str, Any]] = Field(default_factory=dict)
    storeClient: Any = None

    # Hosts send null for sections they did not fill in
    @field_validator("commandOptions", "config", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v
