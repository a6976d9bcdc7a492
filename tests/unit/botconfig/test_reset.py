"""Unit tests for the reset engine."""

import pytest

from botadmin.botconfig.errors import EmptyFieldListError, NoValidFieldsError
from botadmin.botconfig.models import Actor, BotConfigDocument
from botadmin.botconfig.projection import flatten
from botadmin.botconfig.reset import reset_all, reset_selected
from botadmin.botconfig.updater import apply_updates


class TestResetSelected:
    """Tests for reset_selected."""

    def test_theme_scenario(self, document: BotConfigDocument, actor: Actor) -> None:
        """Selected resets count matches; a following full reset finds nothing."""
        apply_updates(document, {"theme": "dark"}, actor)

        assert reset_selected(document, ["theme"], actor).reset_count == 1
        assert flatten(document)["theme"] == "light"
        assert reset_selected(document, ["theme"], actor).reset_count == 1
        assert reset_all(document, actor).reset_count == 0

    def test_counts_fields_already_at_factory(self, document: BotConfigDocument) -> None:
        """Every named field counts, changed or not."""
        result = reset_selected(document, ["theme", "chatbot_name", "missing"])
        assert result.reset_count == 2

    def test_restores_factory_values(self, document: BotConfigDocument, actor: Actor) -> None:
        apply_updates(document, {"chatbot_name": "Max", "kb_sources": ["docs"]}, actor)

        reset_selected(document, ["chatbot_name", "kb_sources"], actor)

        flat = flatten(document)
        assert flat["chatbot_name"] == "Assistant"
        assert flat["kb_sources"] == ["faq"]

    def test_restored_value_is_a_copy(self, document: BotConfigDocument) -> None:
        """Mutating a reset list does not change the factory value."""
        reset_selected(document, ["kb_sources"])
        fields = {field.key: field for _, field in document.iter_fields()}

        fields["kb_sources"].current_value.append("docs")

        assert fields["kb_sources"].factory_value == ["faq"]

    def test_audit_summary(self, document: BotConfigDocument) -> None:
        """Anonymous resets still stamp the audit block."""
        reset_selected(document, ["theme", "tone"])

        assert document.audit.change_count == 1
        assert document.audit.last_updated_by is None
        assert document.audit.last_change_summary == "Reset 2 field(s) to factory values"

    def test_empty_keys_rejected(self, document: BotConfigDocument) -> None:
        with pytest.raises(EmptyFieldListError):
            reset_selected(document, [])

    def test_no_match_rejected(self, document: BotConfigDocument) -> None:
        """Unknown keys only raise and leave the audit untouched."""
        with pytest.raises(NoValidFieldsError):
            reset_selected(document, ["nope"])

        assert document.audit.change_count == 0


class TestResetAll:
    """Tests for reset_all."""

    def test_counts_only_changed_fields(self, document: BotConfigDocument, actor: Actor) -> None:
        apply_updates(
            document,
            {"theme": "dark", "voice": {"voice": "echo", "model": "tts-1"}, "kb_enabled": False},
            actor,
        )

        result = reset_all(document, actor)

        assert result.reset_count == 3
        assert flatten(document)["voice"] == {"voice": "alloy", "model": "tts-1"}
        assert document.audit.last_change_summary == (
            "Reset 3 field(s) to factory values (full reset)"
        )

    def test_idempotent(self, document: BotConfigDocument, actor: Actor) -> None:
        """A second full reset finds nothing to do."""
        apply_updates(document, {"tone": "playful", "blocked_topics": ["politics"]}, actor)

        assert reset_all(document, actor).reset_count == 2
        assert reset_all(document, actor).reset_count == 0

    def test_stamps_audit_even_when_nothing_changed(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        reset_all(document, actor)

        assert document.audit.change_count == 1
        assert document.audit.last_updated_by is not None

    def test_cleared_field_restored(self, document: BotConfigDocument, actor: Actor) -> None:
        """A field cleared to None differs from its factory value."""
        apply_updates(document, {"logo_url": None}, actor)

        assert reset_all(document, actor).reset_count == 1
        assert "logo_url" in flatten(document)
