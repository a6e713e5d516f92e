"""Row validation against mapping field definitions."""

from .checks import (
    EmailCheck,
    FieldCheck,
    NumberCheck,
    RequiredCheck,
    RuleDescriptorCheck,
    TypeCheck,
    UrlCheck,
    is_valid_email,
    is_valid_number,
    is_valid_url,
)
from .engine import ValidationEngine, validate_row, validate_rows

__all__ = [
    "ValidationEngine",
    "validate_row",
    "validate_rows",
    "FieldCheck",
    "RequiredCheck",
    "TypeCheck",
    "EmailCheck",
    "NumberCheck",
    "UrlCheck",
    "RuleDescriptorCheck",
    "is_valid_email",
    "is_valid_number",
    "is_valid_url",
]
