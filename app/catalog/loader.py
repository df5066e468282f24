"""
==============================================================================
Catalog File Loader
==============================================================================

Reads the initial catalog supplied at startup.

JSON Structure:
--------------
[
  {"id": "1", "name": "Fresh Tomatoes", "price": 80, "quantity": 50,
   "category": "Vegetables", "status": "in-stock", "language": "en"},
  ...
]

A top-level object with a "products" array is accepted as well.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


def load_products_file(products_file: Path) -> List[Dict[str, Any]]:
    """
    Read raw product records from a JSON file.

    Records are returned unvalidated; ProductStore.load validates them so a
    bad file never replaces a good catalog.

    Raises:
        FileNotFoundError: If the file does not exist
        AppException: INVALID_CATALOG_FILE for malformed content
    """
    try:
        with products_file.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON: {e}")
        raise exceptions.invalid_catalog_file(str(products_file), str(e)) from e

    if isinstance(data, dict):
        data = data.get("products")

    if not isinstance(data, list):
        raise exceptions.invalid_catalog_file(
            str(products_file), "expected a list of products"
        )

    logger.debug(f"Read {len(data)} product records from {products_file}")
    return data
