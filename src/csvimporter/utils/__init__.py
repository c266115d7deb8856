"""Utility functions for csvimporter."""

from csvimporter.utils.date_parser import parse_date
from csvimporter.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
