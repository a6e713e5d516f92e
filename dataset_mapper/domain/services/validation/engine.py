from __future__ import annotations

from typing import TYPE_CHECKING

from ...entities.dataset import (
    DatasetValidationReport,
    RowValidationResult,
    ValidationError,
)
from .checks import RequiredCheck, RuleDescriptorCheck, default_type_checks

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping as MappingABC

    from ....application.ports.services import LoggerPort
    from ...entities.mapping import FieldDefinition, Mapping
    from .checks import TypeCheck


class ValidationEngine:
    """Validates rows against a mapping's field definitions.

    The engine holds only its check configuration, so one instance may be
    shared across threads and called any number of times. Invalid data is
    reported as ``ValidationError`` entries, never raised.
    """

    def __init__(
        self,
        type_checks: MappingABC[str, TypeCheck] | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        checks = default_type_checks()
        if type_checks:
            checks.update(type_checks)
        self._type_checks = checks
        self._required = RequiredCheck()
        self._descriptors = RuleDescriptorCheck(checks, logger=logger)

    @property
    def supported_types(self) -> list[str]:
        return sorted(self._type_checks)

    def validate_field(self, definition: FieldDefinition, value: object) -> list[str]:
        errors = self._required.check(definition, value)
        type_check = self._type_checks.get(definition.type)
        if type_check is not None:
            errors.extend(type_check.check(definition, value))
        errors.extend(self._descriptors.check(definition, value))
        return errors

    def validate_row(
        self, mapping: Mapping, row: MappingABC[str, object]
    ) -> list[ValidationError]:
        results: list[ValidationError] = []
        for definition in mapping.fields:
            errors = self.validate_field(definition, row.get(definition.name))
            if errors:
                results.append(
                    ValidationError(
                        field_id=definition.id,
                        field_name=definition.name,
                        errors=errors,
                    )
                )
        return results

    def validate_rows(
        self, mapping: Mapping, rows: Iterable[MappingABC[str, object]]
    ) -> DatasetValidationReport:
        report = DatasetValidationReport(mapping_id=mapping.id)
        for index, row in enumerate(rows):
            report.results.append(
                RowValidationResult(row_index=index, errors=self.validate_row(mapping, row))
            )
        return report


_DEFAULT_ENGINE = ValidationEngine()


def validate_row(
    mapping: Mapping, row: MappingABC[str, object]
) -> list[ValidationError]:
    return _DEFAULT_ENGINE.validate_row(mapping, row)


def validate_rows(
    mapping: Mapping, rows: Iterable[MappingABC[str, object]]
) -> DatasetValidationReport:
    return _DEFAULT_ENGINE.validate_rows(mapping, rows)
