"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Unknown view mode", "INVALID_VIEW_MODE", 400)
        raise AppException("Duplicate id", "DUPLICATE_PRODUCT_ID", 409, {"ids": ["1"]})

    Error Codes:
        Catalog:
            - DUPLICATE_PRODUCT_ID (409)
            - INVALID_PRODUCT (422)
            - PRODUCT_NOT_FOUND (404)
            - INVALID_CATALOG_FILE (500)
            - CATALOG_NOT_LOADED (500)

        View:
            - INVALID_VIEW_MODE (400)

        General:
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def duplicate_product_id(product_ids: List[str]) -> AppException:
    """Create duplicate product identifier exception."""
    return AppException(
        f"Duplicate product id(s) in catalog: {', '.join(product_ids)}",
        "DUPLICATE_PRODUCT_ID",
        409,
        {"product_ids": product_ids}
    )


def invalid_product(position: int, reason: str) -> AppException:
    """Create invalid product record exception."""
    return AppException(
        f"Invalid product at position {position}: {reason}",
        "INVALID_PRODUCT",
        422,
        {"position": position, "reason": reason}
    )


def product_not_found(product_id: str) -> AppException:
    """Create product not found exception."""
    return AppException(
        f"Product '{product_id}' not found",
        "PRODUCT_NOT_FOUND",
        404,
        {"product_id": product_id}
    )


def invalid_view_mode(value: Any) -> AppException:
    """Create invalid view mode exception."""
    return AppException(
        f"Invalid view mode: {value!r}. Expected 'grid' or 'list'",
        "INVALID_VIEW_MODE",
        400,
        {"view_mode": str(value)}
    )


def invalid_catalog_file(path: str, reason: str) -> AppException:
    """Create unreadable catalog file exception."""
    return AppException(
        f"Cannot read catalog file {path}: {reason}",
        "INVALID_CATALOG_FILE",
        500,
        {"path": path, "reason": reason}
    )


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException(
        "Product catalog not loaded",
        "CATALOG_NOT_LOADED",
        500
    )
