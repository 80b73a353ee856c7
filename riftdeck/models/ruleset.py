"""
Ruleset — Explicit, Injectable Deck Construction Rules.

INVARIANT: Rule checks must receive an explicit Ruleset.
Nothing in the engine reads a module-level constant directly; the default
format is passed in like any other ruleset so alternate formats can be
tested without touching shared state.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from riftdeck.config import Settings


@dataclass(frozen=True, slots=True)
class ZoneBounds:
    """Inclusive card-count bounds for a zone."""

    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < self.min:
            raise ValueError(f"Invalid zone bounds: min={self.min}, max={self.max}")

    def contains(self, count: int) -> bool:
        """True if `count` lies within the bounds."""
        return self.min <= count <= self.max


@dataclass(frozen=True, slots=True)
class Ruleset:
    """
    Numeric constraints defining a legal deck for a game format.

    Attributes:
        main_deck: Bounds for the MAIN zone
        rune_deck: Bounds for the RUNE zone
        battlefield_count: Exact number of cards required in BATTLEFIELD
        legend_count: Number of legends a deck carries (always 1)
        max_copies_per_card: Copy limit for non-legend, non-battlefield cards
        domains_per_legend: Number of domains a legend defines
    """

    main_deck: ZoneBounds
    rune_deck: ZoneBounds
    battlefield_count: int
    legend_count: int
    max_copies_per_card: int
    domains_per_legend: int

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Ruleset":
        """Build the configured ruleset. Read once at startup."""
        return cls(
            main_deck=ZoneBounds(settings.main_deck_min, settings.main_deck_max),
            rune_deck=ZoneBounds(settings.rune_deck_min, settings.rune_deck_max),
            battlefield_count=settings.battlefield_count,
            legend_count=1,
            max_copies_per_card=settings.max_copies_per_card,
            domains_per_legend=settings.domains_per_legend,
        )


# Riftbound constructed format
DEFAULT_RULESET = Ruleset(
    main_deck=ZoneBounds(min=30, max=40),
    rune_deck=ZoneBounds(min=10, max=12),
    battlefield_count=1,
    legend_count=1,
    max_copies_per_card=3,
    domains_per_legend=2,
)
