"""Convert service result dicts into HTTP responses."""

from typing import Any

from fastapi import HTTPException


def unwrap(result: dict[str, Any], status_code: int = 400) -> dict[str, Any]:
    """Return a successful result, or raise HTTPException with its error."""
    if not result.get("success"):
        error = result.get("error", "Request failed")
        if error.endswith("Please try again."):
            status_code = 500
        raise HTTPException(status_code=status_code, detail=error)
    return result
