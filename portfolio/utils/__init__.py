"""Utility modules."""

from .formatting import format_period, iso_date, last_updated
from .parser import extract_json, parse_model_json, strip_code_fences

__all__ = ["extract_json", "parse_model_json", "strip_code_fences", "iso_date", "format_period", "last_updated"]
