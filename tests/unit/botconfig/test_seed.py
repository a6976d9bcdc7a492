"""Unit tests for factory document seeding."""

import json
from pathlib import Path

from botadmin.botconfig.enums import SectionKey
from botadmin.botconfig.seed import build_default_document, read_default_payload


class TestReadDefaultPayload:
    """Tests for read_default_payload."""

    def test_bundled_default(self) -> None:
        """The packaged factory document covers every section."""
        payload = read_default_payload()

        assert set(payload["sections"]) == {key.value for key in SectionKey}

    def test_custom_path(self, tmp_path: Path) -> None:
        source = tmp_path / "factory.json"
        source.write_text(json.dumps({"_id": "x", "sections": {}}))

        assert read_default_payload(source) == {"_id": "x", "sections": {}}


class TestBuildDefaultDocument:
    """Tests for build_default_document."""

    def test_uses_requested_merchant_id(self) -> None:
        document = build_default_document("merchant_abc")
        assert document.id == "merchant_abc"

    def test_current_values_start_at_factory(self, tmp_path: Path) -> None:
        """Stored current values and audit data in the source are discarded."""
        source = tmp_path / "factory.json"
        source.write_text(
            json.dumps(
                {
                    "_id": "ignored",
                    "meta": {"audit": {"change_count": 7}},
                    "sections": {
                        "ui_branding": {
                            "label": "UI",
                            "fields": [
                                {
                                    "key": "theme",
                                    "label": "Theme",
                                    "type": "dropdown",
                                    "options": ["light", "dark"],
                                    "factory_value": "light",
                                    "current_value": "dark",
                                    "access_role": "merchant",
                                }
                            ],
                        }
                    },
                }
            )
        )

        document = build_default_document("m1", source)

        field = document.sections[SectionKey.UI_BRANDING].fields[0]
        assert field.current_value == "light"
        assert document.audit.change_count == 0
        assert document.revision == 0
