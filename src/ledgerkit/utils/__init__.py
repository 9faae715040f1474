"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import parse_date, get_date_range
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.resolver import resolve_account, resolve_category, resolve_project

__all__ = [
    "parse_date",
    "get_date_range",
    "parse_amount",
    "resolve_account",
    "resolve_category",
    "resolve_project",
]
