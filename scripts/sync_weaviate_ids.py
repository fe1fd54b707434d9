#!/usr/bin/env python3
"""
Sync Weaviate object ids onto MongoDB products.
Finds products without a weaviateId, looks each one up in Weaviate by name,
and writes the id it finds back to MongoDB.

Usage:
  python scripts/sync_weaviate_ids.py [--dry-run] [--policy first|smallest|unique]
"""

import sys
from pathlib import Path

# Add the parent directory to the path so we can import catalog_sync
sys.path.append(str(Path(__file__).parent.parent))

from catalog_sync.cli import main

if __name__ == "__main__":
    sys.exit(main())
