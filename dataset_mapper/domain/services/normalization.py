"""Normalization of source records into the canonical mapping model.

Mapping sources may use either snake_case backend keys (``field_type``,
``sequence``, ``validation_rules``) or the camelCase keys of the authoring
UI (``type``, ``order``, ``validationRules``). Every optional attribute is
defaulted here so that validation and export never branch on missing data.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from ...constants import BackendFieldTypes, Defaults
from ..entities.dataset import MappingDataset
from ..entities.mapping import (
    FieldDefinition,
    FieldType,
    Mapping,
    RuleType,
    SelectOption,
    ValidationRule,
    utc_now,
)
from ..entities.values import is_cell_value, normalize_cell
from ..exceptions import MalformedSourceRecordError
from .field_ordering import resolve_order, sort_fields

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..entities.values import Row

_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "n", "off", ""})


def _first(record: MappingABC[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _identity(record: MappingABC[str, Any], key: str, kind: str) -> str:
    raw = record.get(key)
    text = "" if raw is None else str(raw).strip()
    if not text:
        raise MalformedSourceRecordError(f"missing '{key}'", record_kind=kind)
    return text


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_order(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise MalformedSourceRecordError(
        f"cannot interpret {value!r} as a boolean", record_kind="field"
    )


def parse_timestamp(value: Any, *, record_kind: str = "record") -> datetime:
    if value is None or value == "":
        return utc_now()
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(float(value), tz=UTC)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedSourceRecordError(
                f"invalid timestamp {value!r}", record_kind=record_kind
            ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _normalize_rule(raw: Any) -> ValidationRule:
    if isinstance(raw, ValidationRule):
        return raw
    if not isinstance(raw, MappingABC):
        raise MalformedSourceRecordError(
            f"validation rule must be an object, got {type(raw).__name__}",
            record_kind="field",
        )
    rule_type = _optional_text(raw.get("type"))
    if rule_type is None:
        raise MalformedSourceRecordError(
            "validation rule without a type", record_kind="field"
        )
    value = raw.get("value")
    if isinstance(value, bool) or (
        value is not None and not isinstance(value, (str, int, float))
    ):
        value = str(value)
    return ValidationRule(
        type=rule_type, value=value, message=_optional_text(raw.get("message"))
    )


def normalize_rules(raw: Any) -> tuple[ValidationRule, ...]:
    if raw is None:
        return ()
    if isinstance(raw, MappingABC):
        # backend shape: {"min_length": 3, "email": true, ...}
        return tuple(rules_from_backend(raw))
    if isinstance(raw, (str, bytes)):
        raise MalformedSourceRecordError(
            "validation rules must be a list", record_kind="field"
        )
    return tuple(_normalize_rule(item) for item in raw)


def _normalize_option(raw: Any) -> SelectOption:
    if isinstance(raw, SelectOption):
        return raw
    if isinstance(raw, MappingABC):
        value = _first(raw, "value", "option")
        if value is None:
            raise MalformedSourceRecordError(
                "select option without a value", record_kind="field"
            )
        label = raw.get("label")
        return SelectOption(
            value=str(value), label=str(label) if label is not None else str(value)
        )
    return SelectOption(value=str(raw), label=str(raw))


def normalize_options(raw: Any) -> tuple[SelectOption, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)) or isinstance(raw, MappingABC):
        raise MalformedSourceRecordError(
            "select options must be a list", record_kind="field"
        )
    return tuple(_normalize_option(item) for item in raw)


def normalize_field(
    record: MappingABC[str, Any] | FieldDefinition, index: int
) -> FieldDefinition:
    """Build a FieldDefinition from a source record at ingestion position ``index``."""
    if isinstance(record, FieldDefinition):
        return record
    if not isinstance(record, MappingABC):
        raise MalformedSourceRecordError(
            f"expected an object at position {index}, got {type(record).__name__}",
            record_kind="field",
        )
    field_id = _identity(record, "id", "field")
    name = _identity(record, "name", "field")
    label = _optional_text(record.get("label")) or name
    field_type = (
        _optional_text(_first(record, "field_type", "type")) or Defaults.FIELD_TYPE
    ).lower()
    declared_order = _parse_order(_first(record, "sequence", "order"))
    default_value = _first(record, "default_value", "defaultValue")
    try:
        return FieldDefinition(
            id=field_id,
            name=name,
            label=label,
            type=field_type,
            required=_parse_bool(record.get("required")),
            description=str(record.get("description") or ""),
            validation_rules=normalize_rules(
                _first(record, "validation_rules", "validationRules")
            ),
            select_options=normalize_options(
                _first(record, "select_options", "selectOptions")
            ),
            default_value=None if default_value is None else str(default_value),
            order=resolve_order(declared_order, index),
        )
    except PydanticValidationError as exc:
        raise MalformedSourceRecordError(
            f"field {name!r}: {exc}", record_kind="field"
        ) from exc


def normalize_fields(
    records: Iterable[MappingABC[str, Any] | FieldDefinition],
) -> list[FieldDefinition]:
    return sort_fields(
        normalize_field(record, index) for index, record in enumerate(records)
    )


def normalize_mapping(
    record: MappingABC[str, Any],
    field_records: Iterable[MappingABC[str, Any] | FieldDefinition] | None = None,
    *,
    default_entity_type: str = Defaults.ENTITY_TYPE,
) -> Mapping:
    """Merge a mapping record with its separately fetched fields.

    When ``field_records`` is omitted the record's own ``fields`` list is used.
    """
    if not isinstance(record, MappingABC):
        raise MalformedSourceRecordError(
            f"expected an object, got {type(record).__name__}", record_kind="mapping"
        )
    mapping_id = _identity(record, "id", "mapping")
    name = _identity(record, "name", "mapping")
    if field_records is None:
        field_records = record.get("fields") or []
    fields = normalize_fields(field_records)
    try:
        return Mapping(
            id=mapping_id,
            name=name,
            description=str(record.get("description") or ""),
            entity_type=_optional_text(_first(record, "entity_type", "entityType"))
            or default_entity_type,
            external_reference=_optional_text(
                _first(record, "external_reference", "externalReference")
            ),
            custom_api_name=_optional_text(
                _first(record, "custom_api_name", "customApiName")
            ),
            created_at=parse_timestamp(
                _first(record, "created_at", "createdAt"), record_kind="mapping"
            ),
            updated_at=parse_timestamp(
                _first(record, "updated_at", "updatedAt"), record_kind="mapping"
            ),
            fields=fields,
        )
    except PydanticValidationError as exc:
        raise MalformedSourceRecordError(
            f"mapping {mapping_id!r}: {exc}", record_kind="mapping"
        ) from exc


def normalize_row(raw: Any, index: int = 0) -> Row:
    if isinstance(raw, MappingABC) and isinstance(raw.get("data"), MappingABC):
        raw = raw["data"]
    if not isinstance(raw, MappingABC):
        raise MalformedSourceRecordError(
            f"row {index} must be an object, got {type(raw).__name__}",
            record_kind="row",
        )
    row: Row = {}
    for key, value in raw.items():
        if not is_cell_value(value):
            raise MalformedSourceRecordError(
                f"row {index} field {key!r} holds a non-scalar value",
                record_kind="row",
            )
        row[str(key)] = normalize_cell(value)
    return row


def normalize_rows(raw_rows: Iterable[Any]) -> list[Row]:
    return [normalize_row(raw, index) for index, raw in enumerate(raw_rows)]


def normalize_dataset(record: MappingABC[str, Any]) -> MappingDataset:
    if not isinstance(record, MappingABC):
        raise MalformedSourceRecordError(
            f"expected an object, got {type(record).__name__}", record_kind="dataset"
        )
    dataset_id = _identity(record, "id", "dataset")
    name = _identity(record, "name", "dataset")
    mapping_id = _optional_text(_first(record, "mapping_id", "mappingId"))
    if mapping_id is None:
        raise MalformedSourceRecordError("missing 'mapping_id'", record_kind="dataset")
    try:
        return MappingDataset(
            id=dataset_id,
            mapping_id=mapping_id,
            name=name,
            rows=normalize_rows(record.get("rows") or []),
            created_at=parse_timestamp(
                _first(record, "created_at", "createdAt"), record_kind="dataset"
            ),
            updated_at=parse_timestamp(
                _first(record, "updated_at", "updatedAt"), record_kind="dataset"
            ),
        )
    except PydanticValidationError as exc:
        raise MalformedSourceRecordError(
            f"dataset {dataset_id!r}: {exc}", record_kind="dataset"
        ) from exc


def field_type_from_backend(
    field_type: str | None, validation_rules: MappingABC[str, Any] | None = None
) -> str:
    rules = validation_rules or {}
    match (field_type or "").strip().lower():
        case BackendFieldTypes.STRING:
            if rules.get("options"):
                return FieldType.SELECT.value
            if rules.get("email"):
                return FieldType.EMAIL.value
            if rules.get("uri"):
                return FieldType.URL.value
            return FieldType.TEXT.value
        case kind if kind in BackendFieldTypes.NUMERIC:
            return FieldType.NUMBER.value
        case BackendFieldTypes.BOOLEAN:
            return FieldType.BOOLEAN.value
        case BackendFieldTypes.DATE:
            return FieldType.DATE.value
        case _:
            return FieldType.TEXT.value


def rules_from_backend(validation_rules: MappingABC[str, Any] | None) -> list[ValidationRule]:
    if not validation_rules:
        return []
    rules: list[ValidationRule] = []
    if (value := validation_rules.get("min_length")) is not None:
        rules.append(
            ValidationRule(
                type=RuleType.MIN_LENGTH.value,
                value=value,
                message=f"Minimum length is {value} characters",
            )
        )
    if (value := validation_rules.get("max_length")) is not None:
        rules.append(
            ValidationRule(
                type=RuleType.MAX_LENGTH.value,
                value=value,
                message=f"Maximum length is {value} characters",
            )
        )
    if (value := validation_rules.get("min")) is not None:
        rules.append(
            ValidationRule(
                type=RuleType.MIN.value, value=value, message=f"Minimum value is {value}"
            )
        )
    if (value := validation_rules.get("max")) is not None:
        rules.append(
            ValidationRule(
                type=RuleType.MAX.value, value=value, message=f"Maximum value is {value}"
            )
        )
    if validation_rules.get("email"):
        rules.append(
            ValidationRule(
                type=RuleType.EMAIL.value, message="Must be a valid email address"
            )
        )
    if validation_rules.get("uri"):
        rules.append(
            ValidationRule(type=RuleType.URL.value, message="Must be a valid URL")
        )
    return rules


def field_from_backend(record: MappingABC[str, Any], index: int) -> FieldDefinition:
    """Convert a commerce backend custom field (slug, name, field_type) to a field."""
    raw_rules = record.get("validation_rules")
    backend_rules = raw_rules if isinstance(raw_rules, MappingABC) else None
    field_type = field_type_from_backend(record.get("field_type"), backend_rules)
    options: list[Any] = []
    if field_type == FieldType.SELECT.value and backend_rules:
        options = list(backend_rules.get("options") or [])
    return normalize_field(
        {
            "id": record.get("id"),
            "name": record.get("slug"),
            "label": record.get("name"),
            "type": field_type,
            "required": record.get("required") or False,
            "description": record.get("description") or "",
            "validation_rules": rules_from_backend(backend_rules),
            "select_options": options,
            "order": index,
        },
        index,
    )
