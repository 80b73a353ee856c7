"""Tests for deck statistics."""

import pytest

from riftdeck.engine.stats_calculator import calculate_stats
from riftdeck.models.card import Card, CardType, Domain
from riftdeck.models.deck import DeckCardPlacement, Zone


@pytest.fixture
def curve_cards() -> dict[str, Card]:
    return {
        "three": Card("three", "Three Drop", CardType.UNIT, frozenset({Domain.FURY}), energy_cost=3),
        "five": Card("five", "Five Drop", CardType.UNIT, frozenset({Domain.FURY}), energy_cost=5),
        "free": Card("free", "Free Spell", CardType.SPELL, frozenset({Domain.CALM}), energy_cost=0),
        "nocost": Card("nocost", "Oddity", CardType.UNIT, frozenset({Domain.FURY})),
        "dual": Card(
            "dual", "Dual", CardType.UNIT, frozenset({Domain.FURY, Domain.CALM}), energy_cost=2
        ),
        "pricey": Card("pricey", "Pricey", CardType.UNIT, market_price=2.5, energy_cost=1),
        "chase": Card("chase", "Chase Rare", CardType.GEAR, market_price=10.0, energy_cost=4),
        "rune": Card("rune", "Rune", CardType.RUNE, frozenset({Domain.FURY}), energy_cost=1),
    }


class TestManaCurve:
    def test_curve_counts_copies_by_cost(self, curve_cards) -> None:
        placements = [
            DeckCardPlacement("three", Zone.MAIN, 2),
            DeckCardPlacement("five", Zone.MAIN, 1),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.mana_curve == {3: 2, 5: 1}

    def test_missing_cost_counted_in_total_only(self, curve_cards) -> None:
        """A card without an energy cost is not a zero-cost card."""
        placements = [
            DeckCardPlacement("three", Zone.MAIN, 2),
            DeckCardPlacement("nocost", Zone.MAIN, 1),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.total_cards == 3
        assert stats.mana_curve == {3: 2}

    def test_zero_cost_is_on_curve(self, curve_cards) -> None:
        stats = calculate_stats([DeckCardPlacement("free", Zone.MAIN, 2)], curve_cards)
        assert stats.mana_curve == {0: 2}

    def test_rune_zone_not_on_curve(self, curve_cards) -> None:
        """Only MAIN-zone cards make up the curve."""
        stats = calculate_stats([DeckCardPlacement("rune", Zone.RUNE, 3)], curve_cards)

        assert stats.mana_curve == {}
        assert stats.cards_by_zone[Zone.RUNE] == 3


class TestEstimatedValue:
    def test_price_times_quantity(self, curve_cards) -> None:
        placements = [
            DeckCardPlacement("pricey", Zone.MAIN, 4),
            DeckCardPlacement("chase", Zone.MAIN, 1),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.estimated_value == 20.0

    def test_missing_price_contributes_nothing(self, curve_cards) -> None:
        placements = [
            DeckCardPlacement("pricey", Zone.MAIN, 2),
            DeckCardPlacement("three", Zone.MAIN, 3),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.estimated_value == 5.0

    def test_rounded_to_cents(self, cards, legal_placements) -> None:
        """30 x 0.25 + 10 x 0.1 + 3.5 with float noise removed."""
        stats = calculate_stats(legal_placements, cards)
        assert stats.estimated_value == 12.0


class TestDistribution:
    def test_multi_domain_counts_once_per_domain(self, curve_cards) -> None:
        placements = [
            DeckCardPlacement("dual", Zone.MAIN, 2),
            DeckCardPlacement("three", Zone.MAIN, 1),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.domain_distribution == {"CALM": 2, "FURY": 3}

    def test_domainless_adds_no_domain(self, curve_cards) -> None:
        stats = calculate_stats([DeckCardPlacement("chase", Zone.MAIN, 1)], curve_cards)
        assert stats.domain_distribution == {}

    def test_cards_by_type(self, cards, legal_placements) -> None:
        stats = calculate_stats(legal_placements, cards)
        assert stats.cards_by_type == {"UNIT": 30, "RUNE": 10, "BATTLEFIELD": 1}


class TestZones:
    def test_every_zone_present(self) -> None:
        """An empty deck still reports each zone, at zero."""
        stats = calculate_stats([], {})

        assert stats.total_cards == 0
        assert stats.cards_by_zone == {Zone.MAIN: 0, Zone.RUNE: 0, Zone.BATTLEFIELD: 0}

    def test_legal_deck_totals(self, cards, legal_placements) -> None:
        stats = calculate_stats(legal_placements, cards)

        assert stats.total_cards == 41
        assert stats.cards_by_zone == {Zone.MAIN: 30, Zone.RUNE: 10, Zone.BATTLEFIELD: 1}


class TestUnresolvedCards:
    def test_unresolved_skipped_and_counted(self, curve_cards) -> None:
        """A deleted card never breaks the calculation."""
        placements = [
            DeckCardPlacement("three", Zone.MAIN, 2),
            DeckCardPlacement("deleted-card", Zone.MAIN, 3),
        ]

        stats = calculate_stats(placements, curve_cards)

        assert stats.unresolved_cards == 1
        assert stats.total_cards == 2
        assert stats.cards_by_zone[Zone.MAIN] == 2
        assert stats.mana_curve == {3: 2}


class TestToDict:
    def test_wire_shape(self, curve_cards) -> None:
        placements = [
            DeckCardPlacement("five", Zone.MAIN, 1),
            DeckCardPlacement("three", Zone.MAIN, 2),
        ]

        payload = calculate_stats(placements, curve_cards).to_dict()

        assert payload == {
            "totalCards": 3,
            "cardsByZone": {"MAIN": 3, "RUNE": 0, "BATTLEFIELD": 0},
            "manaCurve": {3: 2, 5: 1},
            "domainDistribution": {"FURY": 3},
            "cardsByType": {"UNIT": 3},
            "estimatedValue": 0.0,
            "unresolvedCards": 0,
        }
        assert list(payload["manaCurve"]) == [3, 5]
