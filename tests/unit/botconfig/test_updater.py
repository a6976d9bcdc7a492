"""Unit tests for the update engine."""

import pytest

from botadmin.botconfig.errors import NoValidFieldsError
from botadmin.botconfig.models import Actor, BotConfigDocument, VoiceSettings
from botadmin.botconfig.projection import flatten
from botadmin.botconfig.updater import apply_updates


class TestApplyUpdates:
    """Tests for apply_updates."""

    def test_matching_key_updated_and_unknown_ignored(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        """Unknown keys are skipped; matched keys are applied and counted."""
        result = apply_updates(document, {"theme": "dark", "unknown_key": 1}, actor)

        assert result.update_count == 1
        assert result.document is document
        assert flatten(document)["theme"] == "dark"
        assert document.audit.change_count == 1

    def test_audit_stamped_with_actor(self, document: BotConfigDocument, actor: Actor) -> None:
        apply_updates(document, {"chatbot_name": "Max"}, actor)

        last_updated_by = document.audit.last_updated_by
        assert last_updated_by is not None
        assert last_updated_by.user_id == actor.id
        assert last_updated_by.full_name == actor.name

    def test_multiple_fields_bump_change_count_once(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        """One call is one change, however many fields it touches."""
        result = apply_updates(
            document,
            {"chatbot_name": "Max", "theme": "dark", "kb_sources": ["faq", "docs"]},
            actor,
        )

        assert result.update_count == 3
        assert document.audit.change_count == 1

    def test_unchanged_value_still_counted(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        """Setting a field to its current value counts as an update."""
        result = apply_updates(document, {"theme": "light"}, actor)
        assert result.update_count == 1

    def test_only_unknown_keys_raises_without_touching_document(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        """No match means no mutation and no audit bump."""
        before = document.model_copy(deep=True)

        with pytest.raises(NoValidFieldsError) as exc_info:
            apply_updates(document, {"nope": 1, "also_nope": 2}, actor)

        assert exc_info.value.message == "No valid fields to update"
        assert document == before
        assert document.audit.change_count == 0

    def test_structured_value_coerced_to_settings(
        self, document: BotConfigDocument, actor: Actor
    ) -> None:
        """Voice settings objects keep their structured shape."""
        apply_updates(document, {"voice": {"voice": "echo", "model": "tts-1-hd"}}, actor)

        fields = {field.key: field for _, field in document.iter_fields()}
        assert isinstance(fields["voice"].current_value, VoiceSettings)
        assert flatten(document)["voice"] == {"voice": "echo", "model": "tts-1-hd"}

    def test_none_clears_value(self, document: BotConfigDocument, actor: Actor) -> None:
        """An explicit None clears the field from the flat view."""
        apply_updates(document, {"logo_url": None}, actor)
        assert "logo_url" not in flatten(document)
