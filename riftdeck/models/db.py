"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A catalog card mirrored from the card data provider.

    Read-only to the deck engine.
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    card_type: Mapped[str] = mapped_column(String(32), index=True)
    domains: Mapped[list[Any]] = mapped_column(JSON, default=list)
    rarity: Mapped[str] = mapped_column(String(32), default="COMMON")
    market_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    energy_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, name={self.name}, type={self.card_type})>"


class DeckDB(Base):
    """
    A user's deck.

    The legend is a single slot on the deck; zone placements live in DeckCardDB.
    """

    __tablename__ = "decks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(255), index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    legend_card_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    # Set from the domain model; updated_at only moves when deck content changes
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Placements in insertion order
    cards: Mapped[list["DeckCardDB"]] = relationship(
        back_populates="deck",
        cascade="all, delete-orphan",
        order_by="DeckCardDB.position",
    )

    def __repr__(self) -> str:
        return f"<DeckDB(id={self.id}, owner_id={self.owner_id})>"


class DeckCardDB(Base):
    """
    One placement: copies of a card in a zone of a deck.

    At most one row per (deck, card, zone).
    """

    __tablename__ = "deck_cards"
    __table_args__ = (UniqueConstraint("deck_id", "card_id", "zone", name="uq_deck_card_zone"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    deck_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("decks.id", ondelete="CASCADE"), index=True
    )
    card_id: Mapped[str] = mapped_column(String(64), index=True)
    zone: Mapped[str] = mapped_column(String(16))
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    position: Mapped[int] = mapped_column(Integer, default=0)

    deck: Mapped["DeckDB"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<DeckCardDB(card={self.card_id}, zone={self.zone}, qty={self.quantity})>"
