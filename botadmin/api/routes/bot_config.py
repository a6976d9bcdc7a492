"""Bot configuration endpoints.

Full documents are addressed by merchant id; the "minimal" endpoints work
on the flat key -> value projection used by chat widgets.
"""

from typing import Any

from fastapi import APIRouter, Body, Query

from botadmin.api.dependencies import BotConfigServiceDep, SettingsDep
from botadmin.api.middleware.auth import ActorDep, OptionalActorDep
from botadmin.api.models.bot_config import (
    ConfigCreatedResponse,
    ConfigListResponse,
    DeleteConfigResponse,
    DeletedConfig,
    FullConfigResponse,
    MinimalConfigResponse,
    ResetAllResponse,
    ResetSelectedRequest,
    ResetSelectedResponse,
    UpdateMinimalResponse,
)
from botadmin.botconfig.models import BotConfigDocument
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/bot-config")


@router.get("", response_model=ConfigListResponse)
async def list_configs(
    service: BotConfigServiceDep,
    settings: SettingsDep,
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, description="Substring of the merchant id"),
) -> ConfigListResponse:
    """List configuration documents, newest first."""
    limit = limit or settings.api.default_page_size
    documents, total = await service.list_configs(search=search, limit=limit, offset=offset)

    return ConfigListResponse(
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(documents) < total,
        data=documents,
    )


@router.post("", response_model=ConfigCreatedResponse, status_code=201)
async def create_config(
    document: BotConfigDocument,
    service: BotConfigServiceDep,
    actor: ActorDep,
) -> ConfigCreatedResponse:
    """Create the configuration document for a new merchant."""
    logger.info("create_config_request", merchant_id=document.id)
    created = await service.create_config(document, actor)
    return ConfigCreatedResponse(data=created, user=actor)


@router.get("/minimal/{merchant_id}", response_model=MinimalConfigResponse)
async def get_minimal_config(
    merchant_id: str,
    service: BotConfigServiceDep,
    actor: OptionalActorDep,
) -> MinimalConfigResponse:
    """Get the flat configuration used to initialise a chatbot."""
    config = await service.get_minimal(merchant_id)
    return MinimalConfigResponse(merchant_id=merchant_id, config=config, user=actor)


@router.patch("/minimal/{merchant_id}", response_model=UpdateMinimalResponse)
async def update_minimal_config(
    merchant_id: str,
    service: BotConfigServiceDep,
    actor: ActorDep,
    updates: dict[str, Any] = Body(..., description="Flat field key -> new value"),
) -> UpdateMinimalResponse:
    """Apply a validated flat update batch."""
    logger.info(
        "update_minimal_request",
        merchant_id=merchant_id,
        keys=sorted(updates),
        user_id=actor.id,
    )
    outcome = await service.update_minimal(merchant_id, updates, actor)

    return UpdateMinimalResponse(
        message=f"Updated {outcome.count} field(s) successfully",
        updates_applied=outcome.count,
        merchant_id=merchant_id,
        config=outcome.config,
        user=actor,
    )


@router.post("/minimal/{merchant_id}/reset_selected", response_model=ResetSelectedResponse)
async def reset_selected_fields(
    merchant_id: str,
    request: ResetSelectedRequest,
    service: BotConfigServiceDep,
    actor: OptionalActorDep,
) -> ResetSelectedResponse:
    """Reset the named fields to their factory values."""
    reset_count = await service.reset_selected(merchant_id, request.fields, actor)

    return ResetSelectedResponse(
        message=f"Reset {reset_count} field(s) to factory values",
        fields_reset=reset_count,
        merchant_id=merchant_id,
    )


@router.post("/minimal/{merchant_id}/reset", response_model=ResetAllResponse)
async def reset_all_fields(
    merchant_id: str,
    service: BotConfigServiceDep,
    actor: ActorDep,
) -> ResetAllResponse:
    """Reset every field to its factory value."""
    outcome = await service.reset_all(merchant_id, actor)

    return ResetAllResponse(
        message=f"Reset {outcome.count} field(s) to factory values",
        fields_reset=outcome.count,
        merchant_id=merchant_id,
        config=outcome.config,
        user=actor,
    )


@router.get("/{merchant_id}", response_model=FullConfigResponse)
async def get_full_config(
    merchant_id: str,
    service: BotConfigServiceDep,
    actor: OptionalActorDep,
) -> FullConfigResponse:
    """Get the complete configuration document."""
    document = await service.get_full(merchant_id)
    return FullConfigResponse(data=document, user=actor)


@router.delete("/{merchant_id}", response_model=DeleteConfigResponse)
async def delete_config(
    merchant_id: str,
    service: BotConfigServiceDep,
    actor: ActorDep,
) -> DeleteConfigResponse:
    """Delete a merchant's configuration document."""
    deleted_id = await service.delete_config(merchant_id, actor)
    return DeleteConfigResponse(data=DeletedConfig(merchant_id=deleted_id), user=actor)
