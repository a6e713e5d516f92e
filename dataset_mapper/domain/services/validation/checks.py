"""Field checks used by the validation engine.

Each check inspects one field definition and one cell value and returns the
messages it produces, in order. Checks never raise for bad data.
"""

from __future__ import annotations

from functools import lru_cache
import re
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from ....constants import Patterns
from ...entities.mapping import FieldType, RuleType
from ...entities.values import is_empty, parse_number, to_text

if TYPE_CHECKING:
    from ....application.ports.services import LoggerPort
    from ...entities.mapping import FieldDefinition, ValidationRule

_EMAIL = re.compile(Patterns.EMAIL)
_URL_SCHEME = re.compile(Patterns.URL_SCHEME)


def is_valid_email(text: str) -> bool:
    return _EMAIL.fullmatch(text) is not None


def is_valid_number(value: object) -> bool:
    return parse_number(value) is not None


def is_valid_url(text: str) -> bool:
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parts = urlsplit(candidate)
        _ = parts.port
    except ValueError:
        return False
    if not parts.scheme or not _URL_SCHEME.match(parts.scheme):
        return False
    return bool(parts.netloc) and bool(parts.hostname)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _format_bound(value: str | int | float | None) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FieldCheck:
    """Base class for field checks."""

    def check(self, definition: FieldDefinition, value: object) -> list[str]:
        raise NotImplementedError("Subclasses must implement check()")


class RequiredCheck(FieldCheck):
    def check(self, definition: FieldDefinition, value: object) -> list[str]:
        if definition.required and is_empty(value):
            return [f"{definition.label} is required"]
        return []


class TypeCheck(FieldCheck):
    """Structural check bound to one declared field type."""

    field_type: str = ""
    message_template: str = "{label} is invalid"

    def is_valid(self, value: object) -> bool:
        raise NotImplementedError("Subclasses must implement is_valid()")

    def message(self, definition: FieldDefinition) -> str:
        return self.message_template.format(label=definition.label)

    def check(self, definition: FieldDefinition, value: object) -> list[str]:
        if is_empty(value) or self.is_valid(value):
            return []
        return [self.message(definition)]


class EmailCheck(TypeCheck):
    field_type = FieldType.EMAIL.value
    message_template = "{label} must be a valid email address"

    def is_valid(self, value: object) -> bool:
        return is_valid_email(to_text(value))


class NumberCheck(TypeCheck):
    field_type = FieldType.NUMBER.value
    message_template = "{label} must be a valid number"

    def is_valid(self, value: object) -> bool:
        return is_valid_number(value)


class UrlCheck(TypeCheck):
    field_type = FieldType.URL.value
    message_template = "{label} must be a valid URL"

    def is_valid(self, value: object) -> bool:
        return is_valid_url(to_text(value))


def default_type_checks() -> dict[str, TypeCheck]:
    return {check.field_type: check for check in (EmailCheck(), NumberCheck(), UrlCheck())}


class RuleDescriptorCheck(FieldCheck):
    """Applies a field's ``validation_rules`` in declared order to non-empty values."""

    def __init__(
        self,
        type_checks: dict[str, TypeCheck],
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        self._type_checks = type_checks
        self._logger = logger

    def check(self, definition: FieldDefinition, value: object) -> list[str]:
        if is_empty(value):
            return []
        messages: list[str] = []
        for rule in definition.validation_rules:
            message = self._apply(definition, rule, value)
            if message is not None:
                messages.append(message)
        return messages

    def _apply(
        self, definition: FieldDefinition, rule: ValidationRule, value: object
    ) -> str | None:
        label = definition.label
        text = to_text(value)
        match rule.type:
            case RuleType.MIN_LENGTH.value:
                bound = self._bound(definition, rule)
                if bound is not None and len(text) < bound:
                    return f"{label} must be at least {_format_bound(rule.value)} characters"
            case RuleType.MAX_LENGTH.value:
                bound = self._bound(definition, rule)
                if bound is not None and len(text) > bound:
                    return f"{label} must be no more than {_format_bound(rule.value)} characters"
            case RuleType.MIN.value:
                bound = self._bound(definition, rule)
                number = parse_number(value)
                if bound is not None and number is not None and number < bound:
                    return f"{label} must be at least {_format_bound(rule.value)}"
            case RuleType.MAX.value:
                bound = self._bound(definition, rule)
                number = parse_number(value)
                if bound is not None and number is not None and number > bound:
                    return f"{label} must be no more than {_format_bound(rule.value)}"
            case RuleType.REGEX.value:
                return self._apply_regex(definition, rule, text)
            case RuleType.EMAIL.value | RuleType.URL.value:
                # the declared type already runs the same structural check
                if definition.type == rule.type:
                    return None
                type_check = self._type_checks.get(rule.type)
                if type_check is not None and not type_check.is_valid(value):
                    return type_check.message(definition)
            case _:
                # "required" is governed by the field flag; unknown types are extensions
                return None
        return None

    def _bound(self, definition: FieldDefinition, rule: ValidationRule) -> float | None:
        bound = parse_number(rule.value)
        if bound is None and self._logger is not None:
            self._logger.debug(
                f"Ignoring {rule.type} rule on {definition.name}: "
                + f"non-numeric bound {rule.value!r}"
            )
        return bound

    def _apply_regex(
        self, definition: FieldDefinition, rule: ValidationRule, text: str
    ) -> str | None:
        if rule.value is None or rule.value == "":
            return None
        try:
            pattern = _compile(str(rule.value))
        except re.error as exc:
            if self._logger is not None:
                self._logger.warning(
                    f"Invalid regex pattern on {definition.name}: {rule.value!r} ({exc})"
                )
            return None
        if pattern.search(text) is None:
            return rule.message or f"{definition.label} format is invalid"
        return None
