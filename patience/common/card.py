"""
This module defines the `Suit`, `Rank`, `Color`, `Facing`, `CardFace` and `Card`
classes, which are used to represent playing cards on a patience table.

- `Suit`: An enum representing the four suits of a standard deck, in the order
Spades, Hearts, Diamonds, Clubs.

- `Rank`: An enum representing the thirteen ranks from Ace (low) to King.
Ranks are totally ordered, and `follows` tells whether one rank is exactly one
above another.

- `Facing`: Whether a card shows its face.

- `CardFace`: The immutable identity of a card (suit and rank).

- `Card`: A card face together with its current, mutable facing.

This module is part of the `patience` package, a rules engine for Klondike.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Color(Enum):
    """
    Enum for the two card colors.
    """

    BLACK = "black"
    RED = "red"

    def __str__(self) -> str:
        return self.value


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    @property
    def color(self) -> Color:
        """The color of the suit."""
        if self in (Suit.SPADES, Suit.CLUBS):
            return Color.BLACK
        return Color.RED

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, Ace low.
    """

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def rank_str(self):
        """A short string representation of the rank."""
        if self in (Rank.ACE, Rank.JACK, Rank.QUEEN, Rank.KING):
            return self.name[0]
        return str(self.value)

    def follows(self, other: "Rank") -> bool:
        """
        Check whether this rank is exactly one higher than another.

        >>> Rank.TWO.follows(Rank.ACE)
        True
        >>> Rank.ACE.follows(Rank.KING)
        False
        """
        return self.value == other.value + 1

    def __lt__(self, other):
        if isinstance(other, Rank):
            return self.value < other.value
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Rank):
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, Rank):
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Rank):
            return self.value >= other.value
        return NotImplemented

    def __str__(self) -> str:
        return self.rank_str


@unique
class Facing(Enum):
    """
    Enum for the side of a card that is showing.
    """

    FACE_DOWN = "face down"
    FACE_UP = "face up"

    def reversed(self) -> "Facing":
        """Return the opposite facing."""
        if self is Facing.FACE_DOWN:
            return Facing.FACE_UP
        return Facing.FACE_DOWN

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CardFace:
    """
    Immutable identity of a playing card.

    Attributes:
        suit: Suit of the card
        rank: Rank of the card
    """

    suit: Suit
    rank: Rank

    @property
    def color(self) -> Color:
        return self.suit.color

    def is_ace(self) -> bool:
        return self.rank == Rank.ACE

    def is_king(self) -> bool:
        return self.rank == Rank.KING

    def with_facing(self, facing: "Facing") -> "Card":
        """Create a card showing this face with the given facing."""
        return Card(self.suit, self.rank, facing)

    def __str__(self) -> str:
        return f"{self.rank.rank_str} of {self.suit}"


class Card:
    """
    Class representing a playing card. The face of the card never changes; only
    its facing does.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> card.is_face_down()
    True
    """

    def __init__(self, suit: Suit, rank: Rank, facing: Facing = Facing.FACE_DOWN):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        :param facing: Initial facing of the card, face down by default
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        if not isinstance(facing, Facing):
            raise TypeError(f"Invalid facing: {facing}")
        self._face = CardFace(suit, rank)
        self.facing = facing

    @property
    def face(self) -> CardFace:
        return self._face

    @property
    def suit(self) -> Suit:
        return self._face.suit

    @property
    def rank(self) -> Rank:
        return self._face.rank

    @property
    def color(self) -> Color:
        return self._face.color

    def is_ace(self) -> bool:
        return self._face.is_ace()

    def is_king(self) -> bool:
        return self._face.is_king()

    def is_face_up(self) -> bool:
        return self.facing == Facing.FACE_UP

    def is_face_down(self) -> bool:
        return self.facing == Facing.FACE_DOWN

    def reverse(self) -> None:
        """Turn the card over."""
        self.facing = self.facing.reversed()

    def reversed(self) -> "Card":
        """Turn the card over and return it."""
        self.reverse()
        return self

    def __eq__(self, other):
        """
        Checks if this card has the same face as another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self._face == other._face
        return NotImplemented

    def __hash__(self):
        return hash(self._face)

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return (
            f"Card(Suit.{self.suit.name}, Rank.{self.rank.name}, "
            f"Facing.{self.facing.name})"
        )

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return str(self._face)
