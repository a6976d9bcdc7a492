"""Unit tests for field validation."""

from typing import Any

import pytest

from botadmin.botconfig.errors import EmptyFieldListError
from botadmin.botconfig.models import BotConfigDocument
from botadmin.botconfig.validation import (
    RULE_REGISTRY,
    AnyRule,
    ColorRule,
    FieldSpec,
    NullableRule,
    build_rule,
    field_specs,
    validate_updates,
    validate_value,
)


def _spec(field_type: str, **kwargs: Any) -> FieldSpec:
    return FieldSpec(key="k", label="Label", type=field_type, **kwargs)


class TestRuleRegistry:
    """Tests for rule lookup."""

    def test_every_field_type_registered(self) -> None:
        assert set(RULE_REGISTRY) == {
            "text",
            "textarea",
            "dropdown",
            "toggle",
            "slider",
            "color",
            "image",
            "number",
            "list",
            "voice_preview",
        }

    def test_mandatory_rule_is_not_wrapped(self) -> None:
        assert isinstance(build_rule(_spec("color"), mandatory=True), ColorRule)

    def test_optional_rule_is_nullable(self) -> None:
        rule = build_rule(_spec("color"))
        assert isinstance(rule, NullableRule)
        assert isinstance(rule.inner, ColorRule)

    def test_unregistered_type_falls_back(self) -> None:
        """Unknown types accept anything but None when mandatory."""
        rule = build_rule(_spec("rich_text"), mandatory=True)

        assert isinstance(rule, AnyRule)
        assert rule.check({"anything": 1}) == []
        assert rule.check(None) == ["Label is required"]
        assert validate_value(_spec("rich_text"), None) == []


class TestColorRule:
    """Tests for hex color validation."""

    @pytest.mark.parametrize("value", ["#1E40AF", "#fff", "#000000"])
    def test_valid_colors(self, value: str) -> None:
        assert validate_value(_spec("color"), value, mandatory=True) == []

    @pytest.mark.parametrize("value", ["blue", "#12345", "1E40AF", "#GGGGGG", 123])
    def test_invalid_colors(self, value: Any) -> None:
        assert validate_value(_spec("color"), value, mandatory=True) == [
            "Label must be a valid hex color (e.g., #FF5733)"
        ]

    @pytest.mark.parametrize("value", ["#fff\n", "#1E40AF\n", " #fff", "#fff0"])
    def test_whole_value_must_match(self, value: str) -> None:
        """Trailing newlines and extra characters are not hex colors."""
        assert validate_value(_spec("color"), value, mandatory=True) == [
            "Label must be a valid hex color (e.g., #FF5733)"
        ]

    def test_optional_color_accepts_none(self) -> None:
        assert validate_value(_spec("color"), None) == []

    def test_mandatory_color_rejects_none(self) -> None:
        assert validate_value(_spec("color"), None, mandatory=True) != []


class TestTextRule:
    """Tests for text validation."""

    def test_max_length(self) -> None:
        spec = _spec("text", max_length=5)

        assert validate_value(spec, "12345") == []
        assert validate_value(spec, "123456") == ["Label must not exceed 5 characters"]

    def test_mandatory_empty_string(self) -> None:
        assert validate_value(_spec("text"), "", mandatory=True) == ["Label cannot be empty"]

    def test_optional_empty_string_allowed(self) -> None:
        assert validate_value(_spec("textarea"), "") == []

    def test_non_string_rejected(self) -> None:
        assert validate_value(_spec("text"), 42) == ["Label must be a string"]


class TestDropdownRule:
    """Tests for dropdown validation."""

    def test_value_must_be_an_option(self) -> None:
        spec = _spec("dropdown", options=("light", "dark", "auto"))

        assert validate_value(spec, "dark") == []
        assert validate_value(spec, "neon") == ["Label must be one of: light, dark, auto"]

    def test_without_options_any_string(self) -> None:
        spec = _spec("dropdown")

        assert validate_value(spec, "anything") == []
        assert validate_value(spec, "", mandatory=True) == ["Label is required"]


class TestScalarRules:
    """Tests for number, toggle and image validation."""

    def test_number_accepts_int_and_float(self) -> None:
        assert validate_value(_spec("number"), 3) == []
        assert validate_value(_spec("slider"), 0.5) == []

    def test_number_rejects_bool_and_strings(self) -> None:
        assert validate_value(_spec("number"), True) == ["Label must be a number"]
        assert validate_value(_spec("slider"), "0.5") == ["Label must be a number"]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_number_rejects_non_finite(self, value: float) -> None:
        assert validate_value(_spec("slider"), value, mandatory=True) == [
            "Label must be a finite number"
        ]

    def test_toggle(self) -> None:
        assert validate_value(_spec("toggle"), False) == []
        assert validate_value(_spec("toggle"), "true") == ["Label must be a boolean"]
        assert validate_value(_spec("toggle"), 1) == ["Label must be a boolean"]

    def test_image_url(self) -> None:
        assert validate_value(_spec("image"), "https://cdn.example.com/logo.png") == []
        assert validate_value(_spec("image"), "not a url") == ["Label must be a valid URL"]


class TestListRule:
    """Tests for list validation."""

    def test_mandatory_empty_list_rejected(self) -> None:
        assert validate_value(_spec("list"), [], mandatory=True) == [
            "Label must contain at least one item"
        ]

    def test_optional_empty_list_allowed(self) -> None:
        assert validate_value(_spec("list"), []) == []

    def test_items_must_be_strings(self) -> None:
        assert validate_value(_spec("list"), ["a", 1]) == ["Label must contain only strings"]

    def test_non_list_rejected(self) -> None:
        assert validate_value(_spec("list"), "a,b") == ["Label must be an array"]


class TestVoicePreviewRule:
    """Tests for voice preview validation."""

    def test_string_or_settings(self) -> None:
        spec = _spec("voice_preview")

        assert validate_value(spec, "alloy") == []
        assert validate_value(spec, {"voice": "alloy", "model": "tts-1"}) == []
        assert validate_value(spec, {}) == []

    def test_settings_members_must_be_strings(self) -> None:
        assert validate_value(_spec("voice_preview"), {"voice": 1}) == [
            "Label voice must be a string"
        ]

    def test_other_types_rejected(self) -> None:
        assert validate_value(_spec("voice_preview"), 3) == [
            "Label must be a string or a voice settings object"
        ]


class TestValidateUpdates:
    """Tests for batch validation against a document."""

    def test_valid_batch(self, document: BotConfigDocument) -> None:
        assert validate_updates(document, {"theme": "dark", "primary_color": "#fff"}) == []

    def test_empty_batch_raises(self, document: BotConfigDocument) -> None:
        with pytest.raises(EmptyFieldListError):
            validate_updates(document, {})

    def test_unknown_key_reported(self, document: BotConfigDocument) -> None:
        failures = validate_updates(document, {"unknown_key": 1})

        assert len(failures) == 1
        assert failures[0].field_name == "unknown_key"
        assert failures[0].error_type == "unknown_field"
        assert failures[0].message == (
            "Field 'unknown_key' is not defined in the configuration schema"
        )

    def test_mandatory_failure_message(self, document: BotConfigDocument) -> None:
        """Mandatory fields get a dedicated top-level message."""
        failures = validate_updates(document, {"primary_color": "blue"})

        assert failures[0].error_type == "invalid_value"
        assert failures[0].message == "'Primary Color' is mandatory and must be provided"
        assert failures[0].label == "Primary Color"
        assert failures[0].section == "ui_branding"
        assert failures[0].errors == ["Primary Color must be a valid hex color (e.g., #FF5733)"]

    def test_optional_failure_message(self, document: BotConfigDocument) -> None:
        failures = validate_updates(document, {"logo_url": "nope"})
        assert failures[0].message == "Invalid value for 'Logo'"

    def test_mandatory_list_rejects_empty(self, document: BotConfigDocument) -> None:
        failures = validate_updates(document, {"kb_sources": []})

        assert [f.field_name for f in failures] == ["kb_sources"]

    def test_all_failures_reported(self, document: BotConfigDocument) -> None:
        """Every bad key is reported, not just the first."""
        failures = validate_updates(
            document,
            {"chatbot_name": "x" * 51, "theme": "neon", "tone": "friendly", "bogus": True},
        )

        assert {f.field_name for f in failures} == {"chatbot_name", "theme", "bogus"}

    def test_optional_field_accepts_none(self, document: BotConfigDocument) -> None:
        assert validate_updates(document, {"logo_url": None}) == []

    def test_mandatory_field_rejects_none(self, document: BotConfigDocument) -> None:
        failures = validate_updates(document, {"chatbot_name": None})
        assert failures[0].errors == ["Chatbot Name must be a string"]


class TestFieldSpecs:
    """Tests for field_specs."""

    def test_specs_carry_metadata(self, document: BotConfigDocument) -> None:
        specs = field_specs(document)

        assert specs["chatbot_name"].max_length == 50
        assert specs["chatbot_name"].mandatory is True
        assert specs["theme"].options == ("light", "dark", "auto")
        assert specs["temperature"].section == "ai_settings"
