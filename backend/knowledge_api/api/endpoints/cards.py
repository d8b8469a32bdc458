from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, Query, status

from knowledge_api.api.schemas.card import (
    CardCreate,
    CardListResponse,
    CardRead,
    CardResponse,
    CardUpdate,
    Pagination,
    ReactionResponse,
)
from knowledge_api.api.schemas.common import SuccessResponse
from knowledge_api.core.models.card import ReactionKind
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.card_service import CardService  # noqa: TCH001
from knowledge_api.dependencies import get_card_service, get_current_user

router = APIRouter()


@router.get("", response_model=CardListResponse)
async def list_cards(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    category: str | None = None,
    search: str | None = None,
    service: CardService = Depends(get_card_service),
):
    """Published cards, newest first. Public."""
    cards, pagination = await service.list_cards(page=page, limit=limit, category=category, search=search)
    return CardListResponse(
        cards=[CardRead.model_validate(c) for c in cards],
        pagination=Pagination(**pagination),
    )


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    payload: CardCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: CardService = Depends(get_card_service),
):
    card = await service.create_card(payload, user_id=current_user.id)
    return CardResponse(message="Card created successfully", card=CardRead.model_validate(card))


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: UUID,
    service: CardService = Depends(get_card_service),
):
    card = await service.get_card(card_id)
    return CardResponse(card=CardRead.model_validate(card))


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: UUID,
    payload: CardUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: CardService = Depends(get_card_service),
):
    card = await service.update_card(card_id, payload, user_id=current_user.id)
    return CardResponse(message="Card updated successfully", card=CardRead.model_validate(card))


@router.delete("/{card_id}", response_model=SuccessResponse)
async def delete_card(
    card_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: CardService = Depends(get_card_service),
):
    await service.delete_card(card_id, user_id=current_user.id)
    return SuccessResponse(message="Card deleted successfully")


@router.post("/{card_id}/like", response_model=ReactionResponse)
async def toggle_like(
    card_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: CardService = Depends(get_card_service),
):
    active, count = await service.toggle_reaction(card_id, current_user.id, ReactionKind.LIKE)
    return ReactionResponse(active=active, count=count)


@router.post("/{card_id}/bookmark", response_model=ReactionResponse)
async def toggle_bookmark(
    card_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: CardService = Depends(get_card_service),
):
    active, count = await service.toggle_reaction(card_id, current_user.id, ReactionKind.BOOKMARK)
    return ReactionResponse(active=active, count=count)
