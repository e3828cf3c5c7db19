# model/revision.py
from pydantic import BaseModel, Field


class RevisionRecord(BaseModel):
    revision: str
    active: bool = False


class FetchRevisionsResult(BaseModel):
    revisions: list[RevisionRecord] = Field(default_factory=list)
