"""Utility functions for bankcore."""

from bankcore.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
