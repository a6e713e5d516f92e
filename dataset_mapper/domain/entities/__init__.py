"""Domain entities.

Mappings, their field definitions, datasets and validation results.
"""

from .dataset import (
    DatasetValidationReport,
    MappingDataset,
    RowValidationResult,
    ValidationError,
)
from .mapping import (
    EntityType,
    FieldDefinition,
    FieldType,
    Mapping,
    RuleType,
    SelectOption,
    ValidationRule,
)
from .values import CellValue, Row, ValueKind

__all__ = [
    # Mapping entities
    "EntityType",
    "FieldDefinition",
    "FieldType",
    "Mapping",
    "RuleType",
    "SelectOption",
    "ValidationRule",
    # Dataset entities
    "MappingDataset",
    "ValidationError",
    "RowValidationResult",
    "DatasetValidationReport",
    # Row values
    "CellValue",
    "Row",
    "ValueKind",
]
