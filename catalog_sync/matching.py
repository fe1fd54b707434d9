"""
Match selection policies.

Weaviate gives no ordering guarantee for a filtered Get query, so when several
objects share a product name the chosen id depends on the policy:

- ``first``: take whatever the service returned first (query limit 1).
- ``smallest``: fetch up to ``match_limit`` ids and take the lexicographically
  smallest one, which is stable across runs.
- ``unique``: fetch two ids and refuse to pick when more than one comes back.
"""
from enum import Enum
from typing import List, Optional

from catalog_sync.exceptions import AmbiguousMatchError


class MatchPolicy(str, Enum):
    FIRST = "first"
    SMALLEST = "smallest"
    UNIQUE = "unique"

    @classmethod
    def parse(cls, value: str) -> "MatchPolicy":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown match policy {value!r} (expected one of: {choices})")

    def query_limit(self, match_limit: int = 100) -> int:
        """Number of objects to request from Weaviate under this policy."""
        if self is MatchPolicy.FIRST:
            return 1
        if self is MatchPolicy.UNIQUE:
            return 2
        return max(1, match_limit)


def select_match(name: str, ids: List[str], policy: MatchPolicy) -> Optional[str]:
    """Pick the Weaviate id for ``name`` out of ``ids``; None when nothing matched."""
    if not ids:
        return None
    if policy is MatchPolicy.SMALLEST:
        return min(ids)
    if policy is MatchPolicy.UNIQUE and len(ids) > 1:
        raise AmbiguousMatchError(name, ids)
    return ids[0]
