"""Presenters for CLI output formatting.

Presenters format mappings and validation reports into rich tables.
"""

from .fields import FieldsPresenter
from .validation import ValidationPresenter

__all__ = ["FieldsPresenter", "ValidationPresenter"]
