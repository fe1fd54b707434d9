"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List, Optional

from catalog_sync.config import REQUIRED_KEYS, SyncSettings
from catalog_sync.exceptions import ProductStoreError, VectorStoreError
from catalog_sync.models import ProductDocument

OPTIONAL_KEYS = (
    "MONGO_DATABASE", "PRODUCT_COLLECTION", "CROSS_REF_FIELD", "NAME_FIELD",
    "WEAVIATE_SCHEME", "WEAVIATE_CLASS", "WEAVIATE_TIMEOUT",
    "MATCH_POLICY", "MATCH_LIMIT", "LOG_LEVEL", "LOG_FILE",
)


class InMemoryProductStore:
    """ProductStore double holding documents in a list, in insertion order."""

    def __init__(self, docs: List[Dict[str, Any]], fail_on: Optional[set] = None):
        self.docs = [dict(doc) for doc in docs]
        self.fail_on = fail_on or set()
        self.writes: List[tuple] = []

    def find_missing_cross_ref(self) -> List[ProductDocument]:
        return [ProductDocument.from_mongo(doc) for doc in self.docs if "weaviateId" not in doc]

    def set_cross_ref(self, product_id, value):
        if product_id in self.fail_on:
            raise ProductStoreError(f"write refused for {product_id}")
        for doc in self.docs:
            if doc["_id"] == product_id:
                doc["weaviateId"] = value
                self.writes.append((product_id, value))
                return
        raise ProductStoreError(f"Product {product_id} no longer exists")

    def get(self, product_id) -> Dict[str, Any]:
        return next(doc for doc in self.docs if doc["_id"] == product_id)


class FakeSearchIndex:
    """SearchIndex double mapping names to the ids Weaviate would return, in order."""

    def __init__(self, objects: Dict[str, List[str]], fail_on: Optional[set] = None):
        self.objects = objects
        self.fail_on = fail_on or set()
        self.calls: List[tuple] = []

    def find_ids_by_name(self, name: str, limit: int = 1) -> List[str]:
        self.calls.append((name, limit))
        if name in self.fail_on:
            raise VectorStoreError(f"lookup failed for {name}")
        return list(self.objects.get(name, []))[:limit]


@pytest.fixture
def required_env() -> Dict[str, str]:
    """Minimal valid environment."""
    return {
        "MONGO_URI": "mongodb://localhost:27017/shop",
        "WEAVIATE_HOST": "demo.weaviate.network",
        "WEAVIATE_API_KEY": "secret-key",
    }


@pytest.fixture
def settings(required_env) -> SyncSettings:
    settings = SyncSettings(required_env)
    settings.validate()
    return settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Process environment with none of the sync variables set and no .env in the working directory.

    Keys are set before being deleted so monkeypatch also removes anything a test loads from a .env file.
    """
    for key in REQUIRED_KEYS + OPTIONAL_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def widget_store() -> InMemoryProductStore:
    """One unsynced product and one already synced."""
    return InMemoryProductStore([
        {"_id": 1, "name": "Widget"},
        {"_id": 2, "name": "Gadget", "weaviateId": "abc"},
    ])


@pytest.fixture
def widget_index() -> FakeSearchIndex:
    return FakeSearchIndex({"Widget": ["w-100"]})


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: marks tests that wire real client classes to mocked transports"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
