"""Utility functions for tradeclaims."""

from tradeclaims.utils.date_parser import parse_date, try_parse_date
from tradeclaims.utils.amount_parser import parse_amount, try_parse_amount

__all__ = ["parse_date", "try_parse_date", "parse_amount", "try_parse_amount"]
