"""
Deck API endpoints.

Deck CRUD plus the engine contracts: card mutations, validation and stats.
Every mutation resolves the cards it needs from the database in one batch,
then runs the synchronous engine on that snapshot.
"""

from dataclasses import replace
from datetime import UTC, datetime
from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from riftdeck.config import settings
from riftdeck.db import (
    create_deck,
    deck_to_model,
    delete_deck,
    get_deck,
    list_decks,
    load_catalog_for_deck,
    new_deck,
    save_deck,
)
from riftdeck.db.database import get_session
from riftdeck.models.deck import Deck, DeckMutation, RemoveCard, SetLegend, SetQuantity, Zone
from riftdeck.models.deck import AddCard as AddCardMutation
from riftdeck.models.failure import AmbiguousZoneError, DeckNotFoundError, PlacementNotFoundError
from riftdeck.models.ruleset import Ruleset
from riftdeck.services.deck_validation import DeckEdit, DeckValidationService

router = APIRouter(prefix="/decks", tags=["decks"])


@lru_cache(maxsize=1)
def get_ruleset() -> Ruleset:
    """Dependency that provides the configured ruleset. Built once."""
    return Ruleset.from_settings(settings)


class CamelModel(BaseModel):
    """Request/response model using the camelCase wire names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Request models ---


class CreateDeckRequest(CamelModel):
    """Request model for creating a deck."""

    owner_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    legend_card_id: str | None = None
    is_public: bool = False


class UpdateDeckRequest(CamelModel):
    """Request model for updating deck metadata."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_public: bool | None = None


class SetLegendRequest(CamelModel):
    """Request model for choosing (or clearing) the legend."""

    legend_card_id: str | None


class AddCardRequest(CamelModel):
    """Request model for adding copies of a card to a zone."""

    card_id: str
    quantity: int = 1
    zone: Zone


class UpdateCardRequest(CamelModel):
    """Request model for setting a card's quantity."""

    quantity: int
    zone: Zone | None = Field(
        default=None,
        description="Zone to update. Inferred from the existing placement when omitted.",
    )


# --- Response models ---


class PlacementResponse(CamelModel):
    card_id: str
    zone: Zone
    quantity: int


class DeckResponse(CamelModel):
    """Response model for a single deck."""

    id: str
    owner_id: str
    name: str
    description: str
    legend_card_id: str | None
    is_public: bool = False
    cards: list[PlacementResponse] = Field(default_factory=list)
    card_count: int = 0
    is_valid: bool = False
    status: str
    created_at: datetime
    updated_at: datetime


class DeckListResponse(CamelModel):
    """Response model for a list of decks."""

    owner_id: str
    decks: list[DeckResponse]
    count: int


class DeleteResponse(CamelModel):
    """Response model for delete operations."""

    deck_id: str
    deleted: bool


class ViolationResponse(CamelModel):
    rule: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ValidationResponse(CamelModel):
    """Response model for deck validation."""

    is_valid: bool
    errors: list[ViolationResponse]


class StatsResponse(CamelModel):
    """Response model for deck statistics."""

    total_cards: int
    cards_by_zone: dict[str, int]
    mana_curve: dict[int, int]
    domain_distribution: dict[str, int]
    cards_by_type: dict[str, int]
    estimated_value: float
    unresolved_cards: int = 0


# --- Helpers ---


def _deck_response(edit: DeckEdit) -> DeckResponse:
    deck = edit.deck
    return DeckResponse(
        id=deck.id,
        owner_id=deck.owner_id,
        name=deck.name,
        description=deck.description,
        legend_card_id=deck.legend_card_id,
        is_public=deck.is_public,
        cards=[
            PlacementResponse(card_id=p.card_id, zone=p.zone, quantity=p.quantity)
            for p in deck.placements
        ],
        card_count=deck.total_placed(),
        is_valid=edit.validation.is_valid,
        status=edit.status.value,
        created_at=deck.created_at,
        updated_at=deck.updated_at,
    )


async def _load_deck(session: AsyncSession, deck_id: str) -> Deck:
    db_deck = await get_deck(session, deck_id)
    if db_deck is None:
        raise DeckNotFoundError(deck_id)
    return deck_to_model(db_deck)


async def _service_for(
    session: AsyncSession, deck: Deck, ruleset: Ruleset, *extra_card_ids: str
) -> DeckValidationService:
    catalog = await load_catalog_for_deck(session, deck, *extra_card_ids)
    return DeckValidationService(catalog, ruleset)


async def _describe(session: AsyncSession, deck: Deck, ruleset: Ruleset) -> DeckResponse:
    service = await _service_for(session, deck, ruleset)
    return _deck_response(DeckEdit(deck=deck, validation=service.validate(deck)))


async def _apply(
    session: AsyncSession,
    deck: Deck,
    mutation: DeckMutation,
    ruleset: Ruleset,
    *extra_card_ids: str,
) -> DeckResponse:
    service = await _service_for(session, deck, ruleset, *extra_card_ids)
    edit = service.edit(deck, mutation)
    if edit.deck is not deck:
        await save_deck(session, edit.deck)
    return _deck_response(edit)


def _zone_for(deck: Deck, card_id: str, zone: Zone | None) -> Zone:
    """Zone a card-level request targets, inferred when not given."""
    zones = deck.zones_for(card_id)
    if zone is not None:
        if zone not in zones:
            raise PlacementNotFoundError(deck.id, card_id)
        return zone
    if not zones:
        raise PlacementNotFoundError(deck.id, card_id)
    if len(zones) > 1:
        raise AmbiguousZoneError(card_id, [z.value for z in zones])
    return zones[0]


# --- Deck CRUD ---


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_user_deck(
    request: CreateDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """
    Create a deck, optionally with its legend.

    The legend must be a LEGEND card; anything else is rejected.
    """
    deck = new_deck(
        request.owner_id, request.name, request.description, is_public=request.is_public
    )
    extra = [request.legend_card_id] if request.legend_card_id else []
    service = await _service_for(session, deck, ruleset, *extra)
    if request.legend_card_id is not None:
        deck = service.apply_mutation(deck, SetLegend(request.legend_card_id))

    await create_deck(session, deck)
    return _deck_response(DeckEdit(deck=deck, validation=service.validate(deck)))


@router.get("", response_model=DeckListResponse)
async def list_user_decks(
    owner_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> DeckListResponse:
    """List a user's decks, most recently updated first."""
    db_decks = await list_decks(session, owner_id, limit=limit)
    decks = [await _describe(session, deck_to_model(d), ruleset) for d in db_decks]
    return DeckListResponse(owner_id=owner_id, decks=decks, count=len(decks))


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_user_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """
    Get a deck with all its cards.

    Returns 404 if deck not found.
    """
    deck = await _load_deck(session, deck_id)
    return await _describe(session, deck, ruleset)


@router.patch("/{deck_id}", response_model=DeckResponse)
async def update_user_deck(
    deck_id: str,
    request: UpdateDeckRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """Update deck name, description or visibility. Cards are untouched."""
    deck = await _load_deck(session, deck_id)
    changes: dict[str, Any] = {}
    if request.name is not None:
        changes["name"] = request.name
    if request.description is not None:
        changes["description"] = request.description
    if request.is_public is not None:
        changes["is_public"] = request.is_public

    if changes:
        deck = replace(deck, **changes, updated_at=datetime.now(UTC))
        await save_deck(session, deck)
    return await _describe(session, deck, ruleset)


@router.delete("/{deck_id}", response_model=DeleteResponse)
async def delete_user_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a deck and its placements."""
    deleted = await delete_deck(session, deck_id)
    if not deleted:
        raise DeckNotFoundError(deck_id)
    return DeleteResponse(deck_id=deck_id, deleted=True)


# --- Engine contracts ---


@router.put("/{deck_id}/legend", response_model=DeckResponse)
async def set_deck_legend(
    deck_id: str,
    request: SetLegendRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """Choose the deck's legend (or clear it with null)."""
    deck = await _load_deck(session, deck_id)
    extra = [request.legend_card_id] if request.legend_card_id else []
    return await _apply(session, deck, SetLegend(request.legend_card_id), ruleset, *extra)


@router.post(
    "/{deck_id}/cards", response_model=DeckResponse, status_code=status.HTTP_201_CREATED
)
async def add_card_to_deck(
    deck_id: str,
    request: AddCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """
    Add copies of a card to a zone.

    Rejected when the card is unknown (404), its type doesn't fit the zone
    (400), or the quantity is not positive (400). Exceeding the copy limit is
    allowed and shows up in validation instead.
    """
    deck = await _load_deck(session, deck_id)
    mutation = AddCardMutation(request.card_id, request.zone, request.quantity)
    return await _apply(session, deck, mutation, ruleset, request.card_id)


@router.put("/{deck_id}/cards/{card_id}", response_model=DeckResponse)
async def update_card_in_deck(
    deck_id: str,
    card_id: str,
    request: UpdateCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> DeckResponse:
    """
    Set the quantity of a card already in the deck. Zero removes it.

    The zone is inferred from the existing placement; it must be given when
    the card sits in more than one zone.
    """
    deck = await _load_deck(session, deck_id)
    zone = _zone_for(deck, card_id, request.zone)
    return await _apply(session, deck, SetQuantity(card_id, zone, request.quantity), ruleset)


@router.delete("/{deck_id}/cards/{card_id}", response_model=DeckResponse)
async def remove_card_from_deck(
    deck_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
    zone: Zone | None = None,
) -> DeckResponse:
    """Remove a card from one zone, or from every zone when none is given."""
    deck = await _load_deck(session, deck_id)
    if not deck.zones_for(card_id) or (zone is not None and zone not in deck.zones_for(card_id)):
        raise PlacementNotFoundError(deck_id, card_id)
    return await _apply(session, deck, RemoveCard(card_id, zone), ruleset)


@router.post("/{deck_id}/validate", response_model=ValidationResponse)
async def validate_user_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> ValidationResponse:
    """
    Validate a deck against the ruleset.

    Always 200 for an existing deck: violations are data, listed in full.
    """
    deck = await _load_deck(session, deck_id)
    service = await _service_for(session, deck, ruleset)
    return ValidationResponse.model_validate(service.validate(deck).to_dict())


@router.get("/{deck_id}/stats", response_model=StatsResponse)
async def get_deck_stats(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    ruleset: Annotated[Ruleset, Depends(get_ruleset)],
) -> StatsResponse:
    """Deck statistics. Cards missing from the catalog are counted, not fatal."""
    deck = await _load_deck(session, deck_id)
    service = await _service_for(session, deck, ruleset)
    return StatsResponse.model_validate(service.compute_stats(deck).to_dict())
