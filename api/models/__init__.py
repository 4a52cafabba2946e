"""Pydantic Models"""

from api.models.timestamp import DateQuery, DateResponse, DiffResponse, ErrorResponse

__all__ = [
    "DateQuery",
    "DateResponse",
    "DiffResponse",
    "ErrorResponse",
]
