"""Declarative validation of command-line flag values."""

from __future__ import annotations

import argparse
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Union

_MISSING = object()

FlagValues = Union[Mapping[str, Any], argparse.Namespace]
_Rule = Callable[[str], Union[str, None]]


class ValidationError(ValueError):
    """Raised when one or more flag values break their rules."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("validation failed:\n - " + "\n - ".join(self.errors))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FieldValidator:
    """The rules attached to one flag; rule-adding methods return ``self`` for chaining."""

    def __init__(self, name: str, lookup: Callable[[str], Any]) -> None:
        self.name = name
        self._lookup = lookup
        self._rules: list[_Rule] = []
        self._creation_errors: list[str] = []

    def _add_creation_error(self, message: str) -> None:
        self._creation_errors.append(message)

    def required(self) -> FieldValidator:
        """Reject an empty value."""

        def rule(value: str) -> str | None:
            if value == "":
                return f"required flag '{self.name}' is missing or empty"
            return None

        self._rules.append(rule)
        return self

    def length(self, required_length: int) -> FieldValidator:
        """Require a non-empty value to have exactly ``required_length`` characters."""

        def rule(value: str) -> str | None:
            if value != "" and len(value) != required_length:
                return (
                    f"flag '{self.name}' must be {required_length} characters long, "
                    f"but got {len(value)}"
                )
            return None

        self._rules.append(rule)
        return self

    def regex(self, pattern: str) -> FieldValidator:
        """Require a non-empty value to match ``pattern``."""
        try:
            compiled = re.compile(pattern, re.ASCII)
        except re.error as exc:
            self._add_creation_error(f"invalid regex pattern for '{self.name}': {exc}")
            self._rules.append(lambda value: None)
            return self

        def rule(value: str) -> str | None:
            if value != "" and compiled.search(value) is None:
                return (
                    f"flag '{self.name}' value '{value}' does not match pattern '{pattern}'"
                )
            return None

        self._rules.append(rule)
        return self

    def allowed_values(self, allowed: Iterable[str]) -> FieldValidator:
        """Require a non-empty value to be one of ``allowed``, ignoring case."""
        choices = list(allowed)
        if not choices:
            self._add_creation_error(
                f"AllowedValues for '{self.name}' called with empty list"
            )
            self._rules.append(lambda value: None)
            return self

        lowered = {choice.lower() for choice in choices}
        shown = "[" + " ".join(choices) + "]"

        def rule(value: str) -> str | None:
            if value == "":
                return None
            if value.lower() not in lowered:
                return (
                    f"flag '{self.name}' has invalid value '{value}'. "
                    f"Allowed values are: {shown}"
                )
            return None

        self._rules.append(rule)
        return self

    def is_student_id(self) -> FieldValidator:
        """Require an 11-digit student identifier."""
        return self.length(11).regex(r"^[0-9]{11}$")

    def is_instructor_id(self) -> FieldValidator:
        """Require an instructor identifier to be present."""
        return self.required()

    def is_date(self) -> FieldValidator:
        """Require a dd-mm-yyyy date."""
        return self.regex(r"^\d{2}-\d{2}-\d{4}$")

    def is_email(self) -> FieldValidator:
        """Require a plausible e-mail address."""
        return self.regex(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

    def is_digit(self) -> FieldValidator:
        """Require digits only."""
        return self.regex(r"^\d+$")

    def errors(self) -> list[str]:
        """Apply the rules and return the messages of those that fail.

        When the value is empty only the first rule runs, so a ``required``
        rule is effective only when it was added first.
        """
        if self._creation_errors:
            return list(self._creation_errors)
        value = self._lookup(self.name)
        if value is _MISSING:
            return [f"validation rule defined for non-existent flag '{self.name}'"]
        text = _as_text(value)
        empty = text == ""
        messages = []
        for index, rule in enumerate(self._rules):
            if empty and index > 0:
                continue
            message = rule(text)
            if message:
                messages.append(message)
        return messages


class ValidationChain:
    """Collects field validators for a set of parsed flag values."""

    def __init__(self, values: FlagValues) -> None:
        self._values = values
        self._fields: dict[str, FieldValidator] = {}

    def _lookup(self, name: str) -> Any:
        if isinstance(self._values, argparse.Namespace):
            return getattr(self._values, name, _MISSING)
        return self._values.get(name, _MISSING)

    def field(self, name: str) -> FieldValidator:
        """Return the validator for flag ``name``, creating it on first use."""
        existing = self._fields.get(name)
        if existing is not None:
            return existing
        validator = FieldValidator(name, self._lookup)
        if self._lookup(name) is _MISSING:
            validator._add_creation_error(f"attempted to validate undefined flag '{name}'")
        self._fields[name] = validator
        return validator

    def validate(self) -> None:
        """Run every field's rules; raise :class:`ValidationError` listing all failures."""
        messages = [
            message for validator in self._fields.values() for message in validator.errors()
        ]
        if messages:
            raise ValidationError(messages)