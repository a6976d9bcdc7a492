"""Field validation for configuration update batches.

Rules are looked up by field type in a registry. Each rule class checks one
value and returns human-readable problems; an empty list means the value is
acceptable. Optional fields wrap their rule so None always passes.
"""

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from botadmin.botconfig.errors import EmptyFieldListError
from botadmin.botconfig.enums import FieldType
from botadmin.botconfig.models import AnyField, BotConfigDocument
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

HEX_COLOR_PATTERN = re.compile(r"#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class FieldSpec:
    """The metadata validation needs about one field."""

    key: str
    label: str
    type: str
    mandatory: bool = False
    max_length: int | None = None
    options: tuple[str, ...] = ()
    section: str | None = None

    @classmethod
    def from_field(cls, config_field: AnyField, section: str | None = None) -> "FieldSpec":
        return cls(
            key=config_field.key,
            label=config_field.label,
            type=config_field.type,
            mandatory=config_field.mandatory,
            max_length=config_field.max_length,
            options=tuple(config_field.options),
            section=section,
        )


@dataclass
class FieldValidationError:
    """A single field-level validation failure."""

    field_name: str
    error_type: str
    message: str
    label: str | None = None
    section: str | None = None
    errors: list[str] = field(default_factory=list)


class FieldRule(ABC):
    """Validation rule for one field."""

    def __init__(self, spec: FieldSpec, mandatory: bool) -> None:
        self.spec = spec
        self.mandatory = mandatory

    @property
    def label(self) -> str:
        return self.spec.label

    @abstractmethod
    def check(self, value: Any) -> list[str]:
        """Return the problems with `value` (empty if valid)."""


RuleFactory = Callable[[FieldSpec, bool], FieldRule]

RULE_REGISTRY: dict[str, RuleFactory] = {}


def register_rule(*field_types: FieldType) -> Callable[[type[FieldRule]], type[FieldRule]]:
    """Class decorator registering a rule for one or more field types."""

    def decorator(rule_cls: type[FieldRule]) -> type[FieldRule]:
        for field_type in field_types:
            RULE_REGISTRY[field_type.value] = rule_cls
        return rule_cls

    return decorator


@register_rule(FieldType.TEXT, FieldType.TEXTAREA)
class TextRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        if not isinstance(value, str):
            return [f"{self.label} must be a string"]
        problems = []
        if self.mandatory and len(value) < 1:
            problems.append(f"{self.label} cannot be empty")
        max_length = self.spec.max_length
        if max_length and len(value) > max_length:
            problems.append(f"{self.label} must not exceed {max_length} characters")
        return problems


@register_rule(FieldType.NUMBER, FieldType.SLIDER)
class NumberRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        # bool subclasses int but is not a number here
        if isinstance(value, bool) or not isinstance(value, int | float):
            return [f"{self.label} must be a number"]
        if not math.isfinite(value):
            return [f"{self.label} must be a finite number"]
        return []


@register_rule(FieldType.TOGGLE)
class ToggleRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        if not isinstance(value, bool):
            return [f"{self.label} must be a boolean"]
        return []


@register_rule(FieldType.DROPDOWN)
class DropdownRule(FieldRule):
    """Member of the option list, or any string when there are no options."""

    def check(self, value: Any) -> list[str]:
        options = self.spec.options
        if options:
            if not isinstance(value, str) or value not in options:
                return [f"{self.label} must be one of: {', '.join(options)}"]
            return []
        if not isinstance(value, str):
            return [f"{self.label} must be a string"]
        if self.mandatory and not value:
            return [f"{self.label} is required"]
        return []


@register_rule(FieldType.COLOR)
class ColorRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        if not isinstance(value, str) or not HEX_COLOR_PATTERN.fullmatch(value):
            return [f"{self.label} must be a valid hex color (e.g., #FF5733)"]
        return []


@register_rule(FieldType.IMAGE)
class ImageRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        if isinstance(value, str):
            try:
                _url_adapter.validate_python(value)
                return []
            except PydanticValidationError:
                pass
        return [f"{self.label} must be a valid URL"]


@register_rule(FieldType.LIST)
class ListRule(FieldRule):
    def check(self, value: Any) -> list[str]:
        if not isinstance(value, list):
            return [f"{self.label} must be an array"]
        if any(not isinstance(item, str) for item in value):
            return [f"{self.label} must contain only strings"]
        if self.mandatory and not value:
            return [f"{self.label} must contain at least one item"]
        return []


@register_rule(FieldType.VOICE_PREVIEW)
class VoicePreviewRule(FieldRule):
    """A voice id string, or an object with optional string voice/model."""

    def check(self, value: Any) -> list[str]:
        if isinstance(value, str):
            return []
        if not isinstance(value, Mapping):
            return [f"{self.label} must be a string or a voice settings object"]
        return [
            f"{self.label} {name} must be a string"
            for name in ("voice", "model")
            if name in value and not isinstance(value[name], str)
        ]


class AnyRule(FieldRule):
    """Fallback for unregistered types: anything goes, but not None if mandatory."""

    def check(self, value: Any) -> list[str]:
        if self.mandatory and value is None:
            return [f"{self.label} is required"]
        return []


class NullableRule(FieldRule):
    """Wraps a rule so that None passes."""

    def __init__(self, inner: FieldRule) -> None:
        super().__init__(inner.spec, inner.mandatory)
        self.inner = inner

    def check(self, value: Any) -> list[str]:
        if value is None:
            return []
        return self.inner.check(value)


def build_rule(spec: FieldSpec, mandatory: bool | None = None) -> FieldRule:
    """Build the rule for a field, defaulting `mandatory` to the field's flag."""
    if mandatory is None:
        mandatory = spec.mandatory
    factory = RULE_REGISTRY.get(spec.type, AnyRule)
    rule = factory(spec, mandatory)
    return rule if mandatory else NullableRule(rule)


def validate_value(spec: FieldSpec, value: Any, mandatory: bool | None = None) -> list[str]:
    """Check one value against the rule for its field."""
    return build_rule(spec, mandatory).check(value)


def field_specs(document: BotConfigDocument) -> dict[str, FieldSpec]:
    """Map every field key in the document to its spec (later sections win)."""
    return {
        config_field.key: FieldSpec.from_field(config_field, section.value)
        for section, config_field in document.iter_fields()
    }


def validate_updates(
    document: BotConfigDocument,
    updates: Mapping[str, Any],
) -> list[FieldValidationError]:
    """Validate a flat update batch against the document's field metadata.

    Every key is checked and all failures are returned together. A key that
    names no field is reported as `unknown_field`, distinct from a rule
    failure (`invalid_value`).

    Raises:
        EmptyFieldListError: If the batch is empty
    """
    if not updates:
        raise EmptyFieldListError("No fields provided for update")

    specs = field_specs(document)
    failures: list[FieldValidationError] = []

    for key, value in updates.items():
        spec = specs.get(key)
        if spec is None:
            failures.append(
                FieldValidationError(
                    field_name=key,
                    error_type="unknown_field",
                    message=f"Field '{key}' is not defined in the configuration schema",
                )
            )
            continue

        problems = validate_value(spec, value)
        if not problems:
            continue

        if spec.mandatory:
            message = f"'{spec.label}' is mandatory and must be provided"
        else:
            message = f"Invalid value for '{spec.label}'"
        failures.append(
            FieldValidationError(
                field_name=key,
                error_type="invalid_value",
                message=message,
                label=spec.label,
                section=spec.section,
                errors=problems,
            )
        )

    if failures:
        logger.warning(
            "config_validation_failed",
            merchant_id=document.id,
            error_count=len(failures),
            fields=[failure.field_name for failure in failures],
        )

    return failures
