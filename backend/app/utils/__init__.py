"""Utility functions and helpers."""

from app.utils.datetime_utils import to_api_timezone
from app.utils.tokens import create_candidate_token

__all__ = [
    "to_api_timezone",
    "create_candidate_token",
]
