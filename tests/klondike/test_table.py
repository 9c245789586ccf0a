"""
Tests for the Klondike table and its actions.
"""

import pytest

from patience.common.card import Card, Facing, Rank, Suit
from patience.common.deck import Deck
from patience.common.action import ActionError, AllowAll, RulesGuard
from patience.klondike.errors import (
    NothingToMoveError,
    PileUnderflowError,
    StockExhaustedError,
)
from patience.klondike.table import (
    DealAction,
    DrawAction,
    MoveAction,
    PileId,
    PileKind,
    RevealAction,
    Table,
)


def up(rank, suit):
    return Card(suit, rank, Facing.FACE_UP)


def down(rank, suit):
    return Card(suit, rank, Facing.FACE_DOWN)


def ranks(pile):
    return [card.rank for card in pile]


class TestPileId:
    def test_constructors(self):
        assert PileId.stock().kind == PileKind.STOCK
        assert PileId.waste().is_waste
        assert PileId.foundation(Suit.HEARTS).suit == Suit.HEARTS
        assert PileId.tableau(3).index == 3
        assert PileId.tableau(3).is_tableau

    def test_equality_and_hash(self):
        assert PileId.tableau(2) == PileId.tableau(2)
        assert PileId.tableau(2) != PileId.tableau(3)
        assert len({PileId.foundation(Suit.CLUBS), PileId.foundation(Suit.CLUBS)}) == 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"kind": PileKind.FOUNDATION},
            {"kind": PileKind.FOUNDATION, "suit": Suit.SPADES, "index": 0},
            {"kind": PileKind.TABLEAU},
            {"kind": PileKind.TABLEAU, "index": -1},
            {"kind": PileKind.STOCK, "index": 0},
            {"kind": PileKind.WASTE, "suit": Suit.HEARTS},
        ],
    )
    def test_invalid_ids(self, kwargs):
        with pytest.raises(ValueError):
            PileId(**kwargs)

    def test_standard_ids(self):
        assert list(PileId.standard()) == [
            PileId.stock(),
            PileId.waste(),
            PileId.foundation(Suit.SPADES),
            PileId.foundation(Suit.HEARTS),
            PileId.foundation(Suit.DIAMONDS),
            PileId.foundation(Suit.CLUBS),
        ]

    def test_all_ids(self):
        ids = list(PileId.all(3))
        assert len(ids) == 9
        assert ids[-3:] == [PileId.tableau(0), PileId.tableau(1), PileId.tableau(2)]
        assert list(PileId.all(0)) == list(PileId.standard())

    def test_str(self):
        assert str(PileId.stock()) == "Stock"
        assert str(PileId.waste()) == "Waste"
        assert str(PileId.foundation(Suit.SPADES)) == "Spades Foundation"
        assert str(PileId.tableau(0)) == "Tableau 1"


class TestTable:
    def test_new_table_holds_cards_in_stock(self):
        table = Table.from_deck(Deck())
        assert len(table.stock) == 52
        assert table.waste.is_empty()
        assert all(pile.is_empty() for pile in table.foundations.values())
        assert table.tableaux == []
        assert table.card_count() == 52

    def test_face_up_cards_are_rejected(self):
        with pytest.raises(ValueError):
            Table([down(Rank.ACE, Suit.SPADES), up(Rank.TWO, Suit.SPADES)])

    def test_reading_past_tableau_end_does_not_grow(self):
        table = Table()
        assert table.pile(PileId.tableau(4)).is_empty()
        assert table.tableaux == []

    def test_writing_past_tableau_end_grows(self):
        table = Table()
        table.pile_mut(PileId.tableau(2)).place_one(down(Rank.ACE, Suit.SPADES))
        assert len(table.tableaux) == 3
        assert len(table.pile(PileId.tableau(2))) == 1
        assert table.pile(PileId.tableau(0)).is_empty()

    def test_pile_lookup(self):
        table = Table()
        assert table.pile(PileId.stock()) is table.stock
        assert table.pile(PileId.waste()) is table.waste
        assert table.pile(PileId.foundation(Suit.DIAMONDS)) is table.foundations[
            Suit.DIAMONDS
        ]

    def test_piles_lists_tableaux_last(self):
        table = Table()
        table.pile_mut(PileId.tableau(1))
        pile_ids = [pile_id for pile_id, _ in table.piles()]
        assert pile_ids == list(PileId.all(2))

    def test_to_dict_hides_face_down_cards(self):
        table = Table([down(Rank.ACE, Suit.SPADES)])
        table.pile_mut(PileId.tableau(0)).place_one(up(Rank.KING, Suit.HEARTS))
        data = table.to_dict()
        assert data["Stock"] == ["##"]
        assert data["Tableau 1"] == ["K of ♥"]
        assert data["Waste"] == []


class TestDealAction:
    def test_deal_moves_top_card_face_down(self):
        table = Table([down(Rank.ACE, Suit.SPADES), down(Rank.TWO, Suit.SPADES)])
        DealAction(PileId.tableau(0)).apply_to(table)
        tableau = table.pile(PileId.tableau(0))
        assert tableau.top_card() == down(Rank.TWO, Suit.SPADES)
        assert tableau.top_card().is_face_down()
        assert ranks(table.stock) == [Rank.ACE]

    def test_deal_from_empty_stock(self):
        table = Table()
        with pytest.raises(StockExhaustedError):
            DealAction(PileId.tableau(0)).apply_to(table)
        assert table.tableaux == []


class TestDrawAction:
    def test_draw_one(self):
        table = Table.from_deck(Deck())
        DrawAction().apply_to(table)
        assert len(table.stock) == 51
        assert table.waste.top_card() == up(Rank.KING, Suit.CLUBS)
        assert table.waste.top_card().is_face_up()

    def test_draw_three_turns_cards_over(self):
        table = Table.from_deck(Deck())
        DrawAction(3).apply_to(table)
        assert ranks(table.waste) == [Rank.KING, Rank.QUEEN, Rank.JACK]
        assert all(card.is_face_up() for card in table.waste)
        assert DrawAction(3).recycles(table) is False

    def test_draw_more_than_stock_holds(self):
        table = Table([down(Rank.ACE, Suit.SPADES)])
        DrawAction(3).apply_to(table)
        assert table.stock.is_empty()
        assert len(table.waste) == 1

    def test_draw_zero_changes_nothing(self):
        table = Table([down(Rank.ACE, Suit.SPADES)])
        DrawAction(0).apply_to(table)
        assert len(table.stock) == 1
        assert table.waste.is_empty()

    def test_negative_draw_is_invalid(self):
        with pytest.raises(ValueError):
            DrawAction(-1)

    def test_recycle_restores_stock_order(self):
        original = Deck().cards
        table = Table(original)
        for _ in range(52):
            DrawAction().apply_to(table)
        assert table.stock.is_empty()
        assert DrawAction().recycles(table) is True

        DrawAction().apply_to(table)
        assert table.waste.is_empty()
        assert table.stock.cards == original
        assert table.stock.is_face_down()

    def test_recycle_with_everything_empty(self):
        table = Table()
        DrawAction().apply_to(table)
        assert table.card_count() == 0


class TestMoveAction:
    def test_move_keeps_order(self):
        table = Table()
        source = table.pile_mut(PileId.tableau(0))
        source.place_cards(
            [
                down(Rank.TWO, Suit.SPADES),
                up(Rank.NINE, Suit.HEARTS),
                up(Rank.EIGHT, Suit.CLUBS),
            ]
        )
        MoveAction(PileId.tableau(0), PileId.tableau(1), 2).apply_to(table)
        assert ranks(table.pile(PileId.tableau(1))) == [Rank.NINE, Rank.EIGHT]
        assert ranks(table.pile(PileId.tableau(0))) == [Rank.TWO]

    def test_move_too_many_fails_without_mutation(self):
        table = Table()
        table.pile_mut(PileId.tableau(0)).place_one(up(Rank.ACE, Suit.SPADES))
        with pytest.raises(PileUnderflowError) as exc_info:
            MoveAction(PileId.tableau(0), PileId.tableau(1), 2).apply_to(table)
        assert exc_info.value.requested == 2
        assert exc_info.value.available == 1
        assert len(table.pile(PileId.tableau(0))) == 1
        assert len(table.tableaux) == 1

    @pytest.mark.parametrize("count", [0, -1])
    def test_empty_move_fails_without_mutation(self, count):
        table = Table()
        table.waste.place_one(up(Rank.KING, Suit.SPADES))
        with pytest.raises(NothingToMoveError) as exc_info:
            MoveAction(PileId.waste(), PileId.tableau(3), count).apply_to(table)
        assert exc_info.value.count == count
        assert len(table.waste) == 1
        assert table.tableaux == []

    def test_empty_move_under_allow_all_is_reported(self):
        guard = RulesGuard(AllowAll(), Table())
        with pytest.raises(ActionError):
            guard.apply_guarded(MoveAction(PileId.waste(), PileId.tableau(0), 0), None)
        assert guard.target.tableaux == []

    def test_move_onto_same_pile(self):
        table = Table()
        table.pile_mut(PileId.tableau(0)).place_cards(
            [up(Rank.ACE, Suit.SPADES), up(Rank.TWO, Suit.SPADES)]
        )
        MoveAction(PileId.tableau(0), PileId.tableau(0), 1).apply_to(table)
        assert ranks(table.pile(PileId.tableau(0))) == [Rank.ACE, Rank.TWO]


class TestRevealAction:
    def test_reveal_turns_top_card_up(self):
        table = Table()
        table.pile_mut(PileId.tableau(0)).place_cards(
            [down(Rank.ACE, Suit.SPADES), down(Rank.TWO, Suit.SPADES)]
        )
        RevealAction(PileId.tableau(0)).apply_to(table)
        pile = table.pile(PileId.tableau(0))
        assert pile.top_card().is_face_up()
        assert pile.cards[0].is_face_down()

    def test_reveal_is_idempotent(self):
        table = Table()
        table.pile_mut(PileId.tableau(0)).place_one(down(Rank.ACE, Suit.SPADES))
        RevealAction(PileId.tableau(0)).apply_to(table)
        RevealAction(PileId.tableau(0)).apply_to(table)
        assert table.pile(PileId.tableau(0)).top_card().is_face_up()

    def test_reveal_empty_pile(self):
        table = Table()
        RevealAction(PileId.tableau(0)).apply_to(table)
        assert table.pile(PileId.tableau(0)).is_empty()
