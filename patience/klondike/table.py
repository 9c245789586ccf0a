"""
The Klondike table: every pile in play and the actions that change them.

Piles are addressed by `PileId`. The tableau is an owned list that grows on
demand: reading an index past its end gives an empty pile, and the first
write at such an index extends the list up to it. This lets a table be dealt
for any tableau width without being told the width up front.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from patience.common.action import Action
from patience.common.card import Card, Facing, Suit
from patience.common.deck import Deck
from patience.common.pile import Pile
from patience.klondike.errors import (
    NothingToMoveError,
    PileUnderflowError,
    StockExhaustedError,
)


class PileKind(Enum):
    """The kinds of pile on a Klondike table."""

    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


@dataclass(frozen=True)
class PileId:
    """
    Address of a pile on the table.

    Use the `stock`, `waste`, `foundation` and `tableau` constructors rather
    than building one by hand.
    """

    kind: PileKind
    suit: Optional[Suit] = None
    index: Optional[int] = None

    def __post_init__(self):
        if self.kind == PileKind.FOUNDATION:
            if not isinstance(self.suit, Suit) or self.index is not None:
                raise ValueError("A foundation pile id needs a suit and no index")
        elif self.kind == PileKind.TABLEAU:
            if self.suit is not None or not isinstance(self.index, int):
                raise ValueError("A tableau pile id needs an index and no suit")
            if self.index < 0:
                raise ValueError(f"Tableau index must be non-negative, got {self.index}")
        elif self.suit is not None or self.index is not None:
            raise ValueError(f"A {self.kind.value} pile id takes no suit or index")

    @classmethod
    def stock(cls) -> "PileId":
        return cls(PileKind.STOCK)

    @classmethod
    def waste(cls) -> "PileId":
        return cls(PileKind.WASTE)

    @classmethod
    def foundation(cls, suit: Suit) -> "PileId":
        return cls(PileKind.FOUNDATION, suit=suit)

    @classmethod
    def tableau(cls, index: int) -> "PileId":
        return cls(PileKind.TABLEAU, index=index)

    @classmethod
    def standard(cls) -> Iterator["PileId"]:
        """Stock, waste and the four foundations."""
        yield cls.stock()
        yield cls.waste()
        for suit in Suit:
            yield cls.foundation(suit)

    @classmethod
    def all(cls, tableau_width: int) -> Iterator["PileId"]:
        """Every standard pile followed by tableau piles 0 to `tableau_width - 1`."""
        yield from cls.standard()
        for index in range(tableau_width):
            yield cls.tableau(index)

    @property
    def is_stock(self) -> bool:
        return self.kind == PileKind.STOCK

    @property
    def is_waste(self) -> bool:
        return self.kind == PileKind.WASTE

    @property
    def is_foundation(self) -> bool:
        return self.kind == PileKind.FOUNDATION

    @property
    def is_tableau(self) -> bool:
        return self.kind == PileKind.TABLEAU

    def __str__(self) -> str:
        if self.kind == PileKind.FOUNDATION:
            return f"{self.suit.name.title()} Foundation"
        if self.kind == PileKind.TABLEAU:
            return f"Tableau {self.index + 1}"
        return self.kind.value.title()


class Table:
    """
    Every pile on a Klondike table.

    A new table holds all of its cards face down in the stock.

    Args:
        cards: The cards to place in the stock, bottom to top

    Raises:
        ValueError: If any of the cards is face up
    """

    def __init__(self, cards: Iterable[Card] = ()):
        stock = Pile(cards)
        if not stock.is_face_down():
            raise ValueError("Every card must be face down when placed in the stock")

        self.stock = stock
        self.waste = Pile()
        self.foundations: Dict[Suit, Pile] = {suit: Pile() for suit in Suit}
        self.tableaux: List[Pile] = []

    @classmethod
    def from_deck(cls, deck: Deck) -> "Table":
        return cls(deck.cards)

    def pile(self, pile_id: PileId) -> Pile:
        """
        Look up a pile for reading.

        A tableau index past the end of the tableau gives a new empty pile that
        is not part of the table.
        """
        if pile_id.kind == PileKind.TABLEAU:
            if pile_id.index < len(self.tableaux):
                return self.tableaux[pile_id.index]
            return Pile()
        return self.pile_mut(pile_id)

    def pile_mut(self, pile_id: PileId) -> Pile:
        """
        Look up a pile for writing, extending the tableau up to the requested
        index if needed.
        """
        if pile_id.kind == PileKind.STOCK:
            return self.stock
        if pile_id.kind == PileKind.WASTE:
            return self.waste
        if pile_id.kind == PileKind.FOUNDATION:
            return self.foundations[pile_id.suit]

        while len(self.tableaux) <= pile_id.index:
            self.tableaux.append(Pile())
        return self.tableaux[pile_id.index]

    def piles(self) -> Iterator[Tuple[PileId, Pile]]:
        """Every pile on the table with its id, tableaux last."""
        for pile_id in PileId.all(len(self.tableaux)):
            yield pile_id, self.pile(pile_id)

    def card_count(self) -> int:
        """Total number of cards on the table."""
        return sum(len(pile) for _, pile in self.piles())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the table to a dictionary suitable for serialization.

        Face-down cards are shown as "##".
        """
        return {
            str(pile_id): [
                str(card) if card.is_face_up() else "##" for card in pile
            ]
            for pile_id, pile in self.piles()
        }

    def __repr__(self) -> str:
        return f"Table({self.card_count()} cards, {len(self.tableaux)} tableau piles)"


class TableAction(Action[Table], ABC):
    """Base class for actions that change a Klondike table."""

    pass


@dataclass(frozen=True)
class DealAction(TableAction):
    """Move the top card of the stock, still face down, onto the target pile."""

    target: PileId

    def apply_to(self, table: Table) -> None:
        if table.stock.is_empty():
            raise StockExhaustedError()
        table.pile_mut(self.target).place(table.stock.take_top())


@dataclass(frozen=True)
class DrawAction(TableAction):
    """
    Turn `count` cards from the stock over onto the waste, or, if the stock is
    empty, turn the whole waste back over into the stock.
    """

    count: int = 1

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {self.count}")

    def recycles(self, table: Table) -> bool:
        """True if applying this action to the table refills the stock."""
        return table.stock.is_empty()

    def apply_to(self, table: Table) -> None:
        if table.stock.is_empty():
            table.stock.place(table.waste.take_all().flipped())
        else:
            table.waste.place(table.stock.take(self.count).flipped())


@dataclass(frozen=True)
class MoveAction(TableAction):
    """Move the top `count` cards of the source pile onto the target pile."""

    source: PileId
    target: PileId
    count: int

    def apply_to(self, table: Table) -> None:
        if self.count <= 0:
            raise NothingToMoveError(self.count)
        available = len(table.pile(self.source))
        if available < self.count:
            raise PileUnderflowError(self.source, self.count, available)
        moved = table.pile_mut(self.source).take(self.count)
        table.pile_mut(self.target).place(moved)


@dataclass(frozen=True)
class RevealAction(TableAction):
    """Turn the top card of the target pile face up."""

    target: PileId

    def apply_to(self, table: Table) -> None:
        table.pile_mut(self.target).flip_top_to(Facing.FACE_UP)
