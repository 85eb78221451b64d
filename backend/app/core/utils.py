"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_cents(value: Optional[Decimal]) -> Decimal:
    """Round a monetary value to two decimal places."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(kind: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": kind, "message": message}
    if details:
        response["details"] = details
    return response
