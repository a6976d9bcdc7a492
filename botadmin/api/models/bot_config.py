"""Request/response models for the bot configuration endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from botadmin.botconfig.models import Actor, BotConfigDocument


class ResetSelectedRequest(BaseModel):
    """Body of a selective reset."""

    fields: list[str] = Field(
        default_factory=list,
        description="Field keys to reset (e.g. ['chatbot_name', 'theme'])",
    )


class FullConfigResponse(BaseModel):
    """Full configuration document."""

    success: bool = True
    message: str = "Admin configuration retrieved successfully"
    data: BotConfigDocument
    user: Actor | None = None


class ConfigCreatedResponse(BaseModel):
    """Newly created configuration document."""

    success: bool = True
    message: str = "Admin configuration created successfully"
    data: BotConfigDocument
    user: Actor


class ConfigListResponse(BaseModel):
    """Paginated list of configuration documents."""

    success: bool = True
    message: str = "Admin configurations retrieved successfully"
    total: int
    limit: int
    offset: int
    has_more: bool
    data: list[BotConfigDocument]


class MinimalConfigResponse(BaseModel):
    """Flat key -> current value projection."""

    success: bool = True
    merchant_id: str
    config: dict[str, Any]
    user: Actor | None = None


class UpdateMinimalResponse(BaseModel):
    """Result of a flat update."""

    success: bool = True
    message: str
    updates_applied: int
    merchant_id: str
    config: dict[str, Any]
    user: Actor


class ResetSelectedResponse(BaseModel):
    """Result of a selective reset."""

    success: bool = True
    message: str
    fields_reset: int
    merchant_id: str


class ResetAllResponse(BaseModel):
    """Result of a full reset."""

    success: bool = True
    message: str
    fields_reset: int
    merchant_id: str
    config: dict[str, Any]
    user: Actor


class DeletedConfig(BaseModel):
    merchant_id: str


class DeleteConfigResponse(BaseModel):
    """Result of a delete."""

    success: bool = True
    message: str = "Admin configuration deleted successfully"
    data: DeletedConfig
    user: Actor
