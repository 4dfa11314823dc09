"""Tests for domain models."""

import pytest

from ryunix.models.banlist import BAN_STATUS_INFO, BanStatus
from ryunix.models.card import card_image_url, card_name
from ryunix.models.catalog import (
    CatalogItem,
    CustomCard,
    ModificationRecord,
    OverlaySnapshot,
    Rating,
    price_for_rating,
)
from ryunix.models.failure import (
    FailureKind,
    InsufficientFundsError,
    NotFoundError,
    OutcomeType,
)
from ryunix.models.gacha import DEFAULT_PACKS, PackType, Rarity, rarity_for_roll


class TestRating:
    def test_ordering(self) -> None:
        ranks = [r.rank for r in (Rating.F, Rating.D, Rating.C, Rating.B, Rating.A, Rating.S)]

        assert ranks == sorted(ranks)
        assert Rating.S_PLUS.rank == len(Rating) - 1

    @pytest.mark.parametrize(
        ("rating", "price"),
        [
            (Rating.F, 0),
            (Rating.D, 10),
            (Rating.C, 25),
            (Rating.B, 50),
            (Rating.A, 100),
            (Rating.S, 200),
            (Rating.S_PLUS, 400),
        ],
    )
    def test_price_table(self, rating: Rating, price: int) -> None:
        assert price_for_rating(rating) == price


class TestSnapshot:
    def test_missing_sections_are_empty(self) -> None:
        snapshot = OverlaySnapshot.from_dict({"archetypes": {"Blue-Eyes": {"rating": "A"}}})

        assert snapshot.archetypes["Blue-Eyes"].rating == Rating.A
        assert snapshot.custom_staples == []
        assert snapshot.removed_staples == []

    def test_malformed_sections_are_empty(self) -> None:
        snapshot = OverlaySnapshot.from_dict(
            {"archetypes": ["nope"], "customStaples": "nope", "removedStaples": {"a": 1}}
        )

        assert snapshot == OverlaySnapshot()

    def test_non_dict_records_skipped(self) -> None:
        snapshot = OverlaySnapshot.from_dict({"archetypes": {"Blue-Eyes": 5, "Dark Magician": {}}})

        assert list(snapshot.archetypes) == ["Dark Magician"]

    def test_unparseable_entries_skipped(self) -> None:
        """One bad record or staple does not drop its neighbours."""
        snapshot = OverlaySnapshot.from_dict(
            {
                "archetypes": {"X": {"rating": "Z"}, "Blue-Eyes": {"rating": "S"}},
                "customStaples": [{"rating": "A"}, {"name": "Maxx C", "rating": "A"}, 7],
            }
        )

        assert list(snapshot.archetypes) == ["Blue-Eyes"]
        assert [s.name for s in snapshot.custom_staples] == ["Maxx C"]

    def test_none_is_empty(self) -> None:
        assert OverlaySnapshot.from_dict(None) == OverlaySnapshot()

    def test_record_omits_unset_fields(self) -> None:
        """Absent fields inherit from the base item, so they are not written."""
        record = ModificationRecord(price=30, excluded_cards=["Sage with Eyes of Blue"])

        assert record.to_dict() == {"price": 30, "excludedCards": ["Sage with Eyes of Blue"]}

    def test_record_reads_stored_keys(self) -> None:
        record = ModificationRecord.from_dict(
            {
                "displayName": "Blue-Eyes Ultimate",
                "imageUrl": "https://img/x.jpg",
                "customCards": ["Dragon Spirit of White", {"name": "Maiden", "data": {"id": 1}}],
                "is_removed": True,
            }
        )

        assert record.display_name == "Blue-Eyes Ultimate"
        assert record.image_url == "https://img/x.jpg"
        assert record.custom_cards == [
            CustomCard("Dragon Spirit of White"),
            CustomCard("Maiden", {"id": 1}),
        ]
        assert record.is_removed is True

    def test_custom_staple_price_defaults_from_rating(self) -> None:
        item = CatalogItem.from_dict({"name": "Infinite Impermanence", "rating": "S"})

        assert item.price == 200
        assert item.image_url is None


class TestGachaModels:
    @pytest.mark.parametrize(
        ("pack_type", "roll", "rarity"),
        [
            (PackType.STANDARD, 0.0, Rarity.ULTRA_RARE),
            (PackType.STANDARD, 0.05, Rarity.SUPER_RARE),
            (PackType.STANDARD, 0.2, Rarity.RARE),
            (PackType.STANDARD, 0.3, Rarity.COMMON),
            (PackType.PREMIUM, 0.04, Rarity.ULTRA_RARE),
            (PackType.PREMIUM, 0.45, Rarity.RARE),
            (PackType.PREMIUM, 0.99, Rarity.COMMON),
        ],
    )
    def test_rarity_thresholds(self, pack_type: PackType, roll: float, rarity: Rarity) -> None:
        assert rarity_for_roll(pack_type, roll) == rarity

    def test_cost_is_flat_per_tier(self) -> None:
        standard, premium = DEFAULT_PACKS

        assert (standard.cost_for(9), standard.cost_for(216)) == (4, 90)
        assert (premium.cost_for(9), premium.cost_for(216)) == (5, 115)


class TestCardRecords:
    def test_image_url_prefers_small_when_asked(self) -> None:
        card = {"card_images": [{"image_url": "big.jpg", "image_url_small": "small.jpg"}]}

        assert card_image_url(card) == "big.jpg"
        assert card_image_url(card, small=True) == "small.jpg"
        assert card_image_url({"card_images": [{"image_url": "big.jpg"}]}, small=True) == "big.jpg"
        assert card_image_url({}) is None

    def test_card_name(self) -> None:
        assert card_name({"name": "Raigeki"}) == "Raigeki"
        assert card_name({}) == ""


class TestBanStatusInfo:
    def test_copies(self) -> None:
        assert [BAN_STATUS_INFO[s].copies for s in BanStatus] == [0, 1, 2, 3]


class TestKnownErrors:
    def test_insufficient_funds_envelope(self) -> None:
        error = InsufficientFundsError(balance=3, cost=4)

        response = error.to_response()

        assert error.status_code == 402
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure.kind == FailureKind.INSUFFICIENT_FUNDS
        assert response.failure.message == "Insufficient coins!"
        assert response.failure.detail == "Balance 3, cost 4"

    def test_not_found_message(self) -> None:
        error = NotFoundError("Pack", "missing")

        assert str(error) == "Pack 'missing' not found"
        assert error.status_code == 404
