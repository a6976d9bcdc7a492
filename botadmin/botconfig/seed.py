"""Factory document loading for new merchants."""

import json
from importlib import resources
from pathlib import Path
from typing import Any

from botadmin.botconfig.models import BotConfigDocument
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

BUNDLED_DEFAULT = "default_config.json"


def read_default_payload(path: Path | None = None) -> dict[str, Any]:
    """Read the factory document as raw JSON.

    Args:
        path: JSON file to read; the bundled default when None
    """
    if path is not None:
        return json.loads(path.read_text(encoding="utf-8"))

    bundled = resources.files("botadmin.botconfig.data").joinpath(BUNDLED_DEFAULT)
    return json.loads(bundled.read_text(encoding="utf-8"))


def build_default_document(merchant_id: str, path: Path | None = None) -> BotConfigDocument:
    """Build a fresh factory document for `merchant_id`.

    Current values start at factory values and the change count at zero,
    whatever the source file says.
    """
    payload = read_default_payload(path)
    payload["_id"] = merchant_id
    payload.get("meta", {}).pop("audit", None)

    for section in payload.get("sections", {}).values():
        for field in section.get("fields", []):
            field.pop("current_value", None)

    document = BotConfigDocument.model_validate(payload)
    logger.debug(
        "default_document_built",
        merchant_id=merchant_id,
        sections=len(document.sections),
    )
    return document
