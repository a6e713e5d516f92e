from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field

from .mapping import utc_now


class MappingDataset(BaseModel):
    id: str = Field(min_length=1)
    mapping_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    rows: list[dict[str, str | int | float | bool | None]] = Field(
        default_factory=list
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(slots=True)
class ValidationError:
    field_id: str
    field_name: str
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RowValidationResult:
    row_index: int
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages_by_field(self) -> dict[str, list[str]]:
        return {error.field_name: list(error.errors) for error in self.errors}


@dataclass(slots=True)
class DatasetValidationReport:
    mapping_id: str
    results: list[RowValidationResult] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.results)

    @property
    def invalid_rows(self) -> list[RowValidationResult]:
        return [result for result in self.results if not result.is_valid]

    @property
    def valid_count(self) -> int:
        return self.row_count - len(self.invalid_rows)

    @property
    def is_valid(self) -> bool:
        return not self.invalid_rows

    def for_row(self, row_index: int) -> RowValidationResult:
        return self.results[row_index]
