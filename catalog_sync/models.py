"""
Data models for the catalog sync job.
Pydantic models for product documents and per-run results.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductDocument(BaseModel):
    """A product document as read from MongoDB (only the fields the sync needs)."""
    model_config = ConfigDict(populate_by_name=True)

    id: Any = Field(..., alias="_id")
    # Left untyped so one bad document fails on its own during sync
    name: Any = None
    weaviate_id: Optional[str] = Field(None, alias="weaviateId")

    @classmethod
    def from_mongo(cls, doc: Dict[str, Any], name_field: str = "name",
                   cross_ref_field: str = "weaviateId") -> "ProductDocument":
        return cls(
            _id=doc["_id"],
            name=doc.get(name_field),
            weaviateId=doc.get(cross_ref_field),
        )


class SyncStatus(str, Enum):
    SYNCED = "synced"
    UNMATCHED = "unmatched"
    FAILED = "failed"
    SKIPPED = "skipped"


class SyncResult(BaseModel):
    """Outcome for a single candidate product."""
    product_id: Any
    name: Any = None
    status: SyncStatus
    weaviate_id: Optional[str] = None
    error: Optional[str] = None


class SyncReport(BaseModel):
    """Totals and per-product results for one run."""
    dry_run: bool = False
    candidates: int = 0
    results: List[SyncResult] = []

    def add(self, result: SyncResult) -> SyncResult:
        self.results.append(result)
        return result

    def count(self, status: SyncStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def synced(self) -> int:
        return self.count(SyncStatus.SYNCED)

    @property
    def unmatched(self) -> int:
        return self.count(SyncStatus.UNMATCHED)

    @property
    def failed(self) -> int:
        return self.count(SyncStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(SyncStatus.SKIPPED)

    def summary(self) -> Dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "candidates": self.candidates,
            "synced": self.synced,
            "unmatched": self.unmatched,
            "failed": self.failed,
            "skipped": self.skipped,
        }
