from datetime import UTC, datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...constants import Defaults
from ..services.field_ordering import sort_fields


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    BOOLEAN = "boolean"
    SELECT = "select"
    PHONE = "phone"
    URL = "url"
    CURRENCY = "currency"


class EntityType(str, Enum):
    PRODUCTS = "products"
    ORDERS = "orders"
    CUSTOMERS = "customers"
    CUSTOM = "custom"


class RuleType(str, Enum):
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MIN = "min"
    MAX = "max"
    REGEX = "regex"
    EMAIL = "email"
    URL = "url"


def utc_now() -> datetime:
    return datetime.now(UTC)


def advance_timestamp(previous: datetime) -> datetime:
    """Current time, forced strictly past ``previous``."""
    now = utc_now()
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class ValidationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    value: str | int | float | None = None
    message: str | None = None


class SelectOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class FieldDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    label: str
    type: str = Defaults.FIELD_TYPE
    required: bool = False
    description: str = ""
    validation_rules: tuple[ValidationRule, ...] = ()
    select_options: tuple[SelectOption, ...] = ()
    default_value: str | None = None
    order: int = 0

    @property
    def field_type(self) -> FieldType | None:
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    @property
    def option_values(self) -> list[str]:
        return [option.value for option in self.select_options]


class Mapping(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    entity_type: str = Defaults.ENTITY_TYPE
    external_reference: str | None = None
    custom_api_name: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    fields: list[FieldDefinition] = Field(default_factory=list)

    @field_validator("fields")
    @classmethod
    def _unique_sorted_fields(
        cls, fields: list[FieldDefinition]
    ) -> list[FieldDefinition]:
        seen_ids: set[str] = set()
        seen_names: set[str] = set()
        for definition in fields:
            if definition.id in seen_ids:
                raise ValueError(f"duplicate field id {definition.id!r}")
            if definition.name in seen_names:
                raise ValueError(f"duplicate field name {definition.name!r}")
            seen_ids.add(definition.id)
            seen_names.add(definition.name)
        return sort_fields(fields)

    @property
    def field_names(self) -> list[str]:
        return [definition.name for definition in self.fields]

    @property
    def labels(self) -> list[str]:
        return [definition.label for definition in self.fields]

    def get_field(self, name: str) -> FieldDefinition | None:
        for definition in self.fields:
            if definition.name == name:
                return definition
        return None

    @property
    def required_fields(self) -> list[FieldDefinition]:
        return [definition for definition in self.fields if definition.required]
