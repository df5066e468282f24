"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- storefront: Seller catalog screen

==============================================================================
"""

from . import health, storefront

__all__ = ["health", "storefront"]
