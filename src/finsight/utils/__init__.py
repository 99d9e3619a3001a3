"""Utility functions for finsight."""

from finsight.utils.date_parser import parse_date, to_datetime
from finsight.utils.amount_parser import parse_amount, round_half_up, format_amount
from finsight.utils.logger import setup_logging

__all__ = [
    "parse_date",
    "to_datetime",
    "parse_amount",
    "round_half_up",
    "format_amount",
    "setup_logging",
]
