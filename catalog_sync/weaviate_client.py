"""Weaviate GraphQL client for looking up product objects by name.

Only the one query the sync needs is implemented: a filtered ``Get`` on the
product class returning object ids.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from catalog_sync.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/v1/graphql"


class SearchIndex(Protocol):
    """Capabilities the reconciler needs from the vector-search service."""

    def find_ids_by_name(self, name: str, limit: int = 1) -> List[str]:
        ...


def build_base_url(host: str, scheme: str = "https") -> str:
    """Join scheme and host, accepting hosts that already carry a scheme."""
    host = host.strip().rstrip("/")
    if "://" in host:
        return host
    return f"{scheme}://{host}"


def build_name_query(class_name: str, name: str, limit: int = 1, property_name: str = "name") -> str:
    """GraphQL Get query for objects whose ``property_name`` equals ``name`` exactly."""
    # JSON string escaping is valid GraphQL string escaping
    value = json.dumps(name)
    path = json.dumps([property_name])
    return (
        "{ Get { "
        f"{class_name}(where: {{path: {path}, operator: Equal, valueString: {value}}}, limit: {int(limit)}) "
        "{ _additional { id } } "
        "} }"
    )


class WeaviateClient:
    """Client for Weaviate's GraphQL endpoint."""

    def __init__(self, host: str, api_key: str, scheme: str = "https", class_name: str = "Product",
                 timeout: Optional[float] = None, http_client: Optional[httpx.Client] = None):
        self.base_url = build_base_url(host, scheme)
        self.class_name = class_name
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def close(self):
        """Close the HTTP client."""
        if self._owns_client:
            self.http_client.close()

    def graphql(self, query: str) -> Dict[str, Any]:
        """POST a GraphQL query and return its ``data`` member."""
        url = f"{self.base_url}{GRAPHQL_PATH}"
        try:
            response = self.http_client.post(url, json={"query": query}, headers=self.headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise VectorStoreError(
                f"Weaviate returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise VectorStoreError(f"Weaviate request failed: {e}") from e
        except ValueError as e:
            raise VectorStoreError(f"Weaviate returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise VectorStoreError("Weaviate returned an unexpected payload")
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors
            )
            raise VectorStoreError(f"Weaviate GraphQL error: {messages}")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise VectorStoreError("Weaviate response has no data")
        return data

    def find_ids_by_name(self, name: str, limit: int = 1) -> List[str]:
        """Return ids of ``class_name`` objects whose name equals ``name`` (case-sensitive)."""
        data = self.graphql(build_name_query(self.class_name, name, limit))
        get_section = data.get("Get")
        hits = get_section.get(self.class_name) if isinstance(get_section, dict) else None
        if not isinstance(hits, list):
            raise VectorStoreError(f"Weaviate response is missing Get.{self.class_name}")

        ids: List[str] = []
        for hit in hits:
            try:
                ids.append(str(hit["_additional"]["id"]))
            except (KeyError, TypeError) as e:
                raise VectorStoreError(f"Weaviate object without _additional.id: {hit!r}") from e
        logger.debug(f"Weaviate lookup name={name!r} -> {ids}")
        return ids
