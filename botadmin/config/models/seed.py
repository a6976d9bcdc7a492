"""Startup seeding configuration."""

from pathlib import Path

from pydantic import BaseModel, Field


class SeedConfig(BaseModel):
    """Which merchants get a factory document when the app starts."""

    merchant_ids: list[str] = Field(
        default_factory=list,
        description="Merchant ids seeded with the default document if absent",
    )
    default_document: Path | None = Field(
        default=None,
        description="JSON file with the factory document (bundled default if None)",
    )
