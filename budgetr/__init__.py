"""Budgetr: expenditure tracking with frequency-normalized budget projection."""

__version__ = "0.1.0"
