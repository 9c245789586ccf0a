"""
This module contains the Pile class, an ordered stack of cards.

Cards are stored bottom to top; the top of the pile is the most recently
placed card. Moving cards between piles transfers them: the source pile no
longer holds them afterwards.
"""

from typing import Iterable, Iterator, List, Optional

from patience.common.card import Card, Facing


class Pile:
    """
    An ordered stack of cards.

    >>> from patience.common.card import Rank, Suit
    >>> pile = Pile([Card(Suit.SPADES, Rank.ACE), Card(Suit.HEARTS, Rank.TWO)])
    >>> print(pile.top_card())
    2 of ♥
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards is not None else []

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards, bottom to top."""
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def is_face_down(self) -> bool:
        """True if every card in the pile is face down."""
        return all(card.is_face_down() for card in self._cards)

    def top_card(self) -> Optional[Card]:
        """Returns the top card, or None if the pile is empty."""
        if not self._cards:
            return None
        return self._cards[-1]

    def top_cards(self, count: int) -> List[Card]:
        """
        Returns up to `count` cards from the top of the pile, bottom to top.

        Fewer cards are returned if the pile holds fewer than `count`.
        """
        if count <= 0:
            return []
        return self._cards[-count:]

    def face_up_count(self) -> int:
        """Length of the maximal run of face-up cards at the top of the pile."""
        count = 0
        for card in reversed(self._cards):
            if not card.is_face_up():
                break
            count += 1
        return count

    def face_up_run(self) -> List[Card]:
        """The maximal run of face-up cards at the top of the pile."""
        return self.top_cards(self.face_up_count())

    def place(self, other: "Pile") -> None:
        """
        Place the contents of another pile on top of this one, keeping their
        order. The other pile is left empty.
        """
        if other is self:
            return
        self._cards.extend(other._cards)
        other._cards = []

    def place_one(self, card: Card) -> None:
        self._cards.append(card)

    def place_cards(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def take(self, count: int) -> "Pile":
        """
        Remove the top `count` cards and return them as a new pile.

        Takes the whole pile if it holds fewer than `count` cards.
        """
        if count <= 0:
            return Pile()
        start_index = max(len(self._cards) - count, 0)
        taken = self._cards[start_index:]
        del self._cards[start_index:]
        return Pile(taken)

    def take_top(self) -> "Pile":
        return self.take(1)

    def take_all(self) -> "Pile":
        taken, self._cards = self._cards, []
        return Pile(taken)

    def flip(self) -> None:
        """Turn the whole pile over: reverse the order and facing of every card."""
        self._cards = [card.reversed() for card in reversed(self._cards)]

    def flipped(self) -> "Pile":
        self.flip()
        return self

    def flip_top(self) -> None:
        if self._cards:
            self._cards[-1].reverse()

    def flip_top_to(self, facing: Facing) -> None:
        if self._cards:
            self._cards[-1].facing = facing

    def __repr__(self) -> str:
        return f"Pile({self._cards!r})"

    def __str__(self) -> str:
        return ", ".join(
            str(card) if card.is_face_up() else "##" for card in self._cards
        )
