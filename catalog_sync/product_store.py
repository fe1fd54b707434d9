"""
Product Store
Document-store side of the sync: find products lacking a Weaviate id and record the id once found
"""

import logging
from typing import Any, List, Protocol

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from catalog_sync.exceptions import ProductStoreError
from catalog_sync.models import ProductDocument

logger = logging.getLogger(__name__)


class ProductStore(Protocol):
    """Capabilities the reconciler needs from the document store."""

    def find_missing_cross_ref(self) -> List[ProductDocument]:
        ...

    def set_cross_ref(self, product_id: Any, value: str) -> None:
        ...


class MongoProductStore:
    """ProductStore backed by a pymongo collection."""

    def __init__(self, collection: Collection, name_field: str = "name", cross_ref_field: str = "weaviateId"):
        self.collection = collection
        self.name_field = name_field
        self.cross_ref_field = cross_ref_field

    def find_missing_cross_ref(self) -> List[ProductDocument]:
        """Return every product whose cross-reference field does not exist, in store order."""
        try:
            cursor = self.collection.find(
                {self.cross_ref_field: {"$exists": False}},
                {"_id": 1, self.name_field: 1},
            )
            return [
                ProductDocument.from_mongo(doc, self.name_field, self.cross_ref_field)
                for doc in cursor
            ]
        except PyMongoError as e:
            raise ProductStoreError(f"Failed to query products: {e}") from e

    def set_cross_ref(self, product_id: Any, value: str) -> None:
        """Set the cross-reference field on the product with ``_id == product_id``."""
        try:
            result = self.collection.update_one(
                {"_id": product_id},
                {"$set": {self.cross_ref_field: value}},
            )
        except PyMongoError as e:
            raise ProductStoreError(f"Failed to update product {product_id}: {e}") from e
        if result.matched_count == 0:
            raise ProductStoreError(f"Product {product_id} no longer exists")
        logger.debug(f"Set {self.cross_ref_field}={value} on product {product_id}")
