# util/functions.py
from typing import List, Sequence


def split_revision_list(raw: str | None) -> List[str]:
    """
    - Turn the stored comma-joined list into keys, most-recent-first.
    - Absent or empty values are an empty list; blank segments are dropped.
    """
    if not raw:
        return []
    return [k for k in raw.split(",") if k]


def join_revision_list(keys: Sequence[str]) -> str:
    return ",".join(keys)


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()
