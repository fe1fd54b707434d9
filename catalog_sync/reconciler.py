"""
Reconciler
Copies Weaviate object ids onto MongoDB product documents that lack one.

The run is strictly sequential: one product at a time, lookup then write.
A failure on one product is logged and the loop moves on; products left
without an id are picked up again by the next run.
"""

import logging
from typing import Callable, List, Optional

import httpx
from pymongo import MongoClient

from catalog_sync.config import SyncSettings
from catalog_sync.matching import MatchPolicy, select_match
from catalog_sync.models import ProductDocument, SyncReport, SyncResult, SyncStatus
from catalog_sync.mongodb_config import MongoDBConfig
from catalog_sync.product_store import MongoProductStore, ProductStore
from catalog_sync.weaviate_client import SearchIndex, WeaviateClient

logger = logging.getLogger(__name__)


class Reconciler:
    """Runs one identifier sync between a ProductStore and a SearchIndex."""

    def __init__(self, store: ProductStore, index: SearchIndex,
                 policy: MatchPolicy = MatchPolicy.FIRST, match_limit: int = 100,
                 dry_run: bool = False, closers: Optional[List[Callable[[], None]]] = None):
        self.store = store
        self.index = index
        self.policy = policy
        self.match_limit = match_limit
        self.dry_run = dry_run
        self.closers = list(closers or [])

    @classmethod
    def from_settings(cls, settings: SyncSettings, dry_run: bool = False,
                      policy: Optional[MatchPolicy] = None,
                      client_factory=MongoClient,
                      http_client: Optional[httpx.Client] = None) -> "Reconciler":
        """Connect to both stores. Connection failures propagate to the caller."""
        index = WeaviateClient(
            settings.WEAVIATE_HOST,
            settings.WEAVIATE_API_KEY,
            scheme=settings.WEAVIATE_SCHEME,
            class_name=settings.WEAVIATE_CLASS,
            timeout=settings.WEAVIATE_TIMEOUT,
            http_client=http_client,
        )
        mongodb = MongoDBConfig(settings.MONGO_URI, settings.MONGO_DATABASE, client_factory=client_factory)
        try:
            database = mongodb.connect()
        except Exception:
            index.close()
            raise
        store = MongoProductStore(
            database[settings.PRODUCT_COLLECTION],
            name_field=settings.NAME_FIELD,
            cross_ref_field=settings.CROSS_REF_FIELD,
        )
        logger.info(f"Weaviate client ready for {index.base_url} (class {settings.WEAVIATE_CLASS})")
        return cls(
            store,
            index,
            policy=policy or settings.match_policy,
            match_limit=settings.MATCH_LIMIT,
            dry_run=dry_run,
            closers=[index.close, mongodb.disconnect],
        )

    def run(self) -> SyncReport:
        """Sync every product missing an id, then release both connections."""
        try:
            report = self.reconcile()
        finally:
            self.close()
        logger.info(
            f"Summary: {report.synced} synced, {report.unmatched} unmatched, "
            f"{report.failed} failed, {report.skipped} skipped of {report.candidates}"
        )
        logger.info("🎉 Sync complete.")
        return report

    def reconcile(self) -> SyncReport:
        candidates = self.store.find_missing_cross_ref()
        logger.info(f"🔍 Found {len(candidates)} products to sync…")
        report = SyncReport(dry_run=self.dry_run, candidates=len(candidates))
        for product in candidates:
            report.add(self.sync_product(product))
        return report

    def sync_product(self, product: ProductDocument) -> SyncResult:
        """Look up one product in the index and record the id. Never raises."""
        try:
            if product.name is None or product.name == "":
                raise ValueError("product has no name")
            if not isinstance(product.name, str):
                raise ValueError(f"name is not a string: {product.name!r}")

            ids = self.index.find_ids_by_name(product.name, limit=self.policy.query_limit(self.match_limit))
            weaviate_id = select_match(product.name, ids, self.policy)
            if weaviate_id is None:
                logger.warning(f'⚠️  No Weaviate object found for name="{product.name}"')
                return SyncResult(product_id=product.id, name=product.name, status=SyncStatus.UNMATCHED)

            if self.dry_run:
                logger.info(f'Would sync "{product.name}" → {weaviate_id} (dry run)')
                return SyncResult(product_id=product.id, name=product.name,
                                  status=SyncStatus.SKIPPED, weaviate_id=weaviate_id)

            self.store.set_cross_ref(product.id, weaviate_id)
            logger.info(f'✅ Synced "{product.name}" → {weaviate_id}')
            return SyncResult(product_id=product.id, name=product.name,
                              status=SyncStatus.SYNCED, weaviate_id=weaviate_id)

        except Exception as e:
            logger.error(f'❌ Error syncing "{product.name}": {e}')
            return SyncResult(product_id=product.id, name=product.name,
                              status=SyncStatus.FAILED, error=str(e))

    def close(self):
        """Run registered closers in order; a failing closer does not skip the rest."""
        closers, self.closers = self.closers, []
        for closer in closers:
            try:
                closer()
            except Exception as e:
                logger.warning(f"Error during teardown: {e}")
