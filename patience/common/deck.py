"""
This module contains the Deck class, which represents a single 52-card deck,
and the shufflers that can be used to permute it.

The engine never owns a source of randomness: a `Shuffler` is handed to
whoever builds a deck.

>>> deck = Deck()
>>> deck.size
52
>>> deck.cards[0]
Card(Suit.SPADES, Rank.ACE, Facing.FACE_DOWN)
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from patience.common.card import Card, Facing, Rank, Suit


class Shuffler(ABC):
    """
    A capability that permutes a list of cards in place.
    """

    @abstractmethod
    def shuffle(self, cards: List[Card]) -> None:
        pass


class NoOpShuffler(Shuffler):
    """Leaves the cards in their original order. Useful for replaying deals."""

    def shuffle(self, cards: List[Card]) -> None:
        pass


class RandomShuffler(Shuffler):
    """
    Shuffles with a `random.Random` instance.

    :param rng: Random number generator to use (optional)
    :param seed: Seed for a new generator, ignored if `rng` is given
    """

    def __init__(
        self, rng: Optional[random.Random] = None, seed: Union[int, str, None] = None
    ):
        self.rng = rng if rng is not None else random.Random(seed)

    def shuffle(self, cards: List[Card]) -> None:
        self.rng.shuffle(cards)

    def __repr__(self) -> str:
        return "RandomShuffler()"


class Deck:
    """
    A class representing a full deck of face-down cards.
    """

    def __init__(self):
        """
        Initialize a Deck instance with every suit and rank combination.

        >>> len(Deck().cards)
        52
        """
        self.cards: List[Card] = self.initialize_default_deck()

    @staticmethod
    def initialize_default_deck() -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks,
        suit-major, every card face down.

        :return: A list of Card instances representing the default deck.
        """
        return [Card(suit, rank, Facing.FACE_DOWN) for suit in Suit for rank in Rank]

    @classmethod
    def shuffled(cls, shuffler: Shuffler) -> "Deck":
        """
        Create a new deck and shuffle it with the given shuffler.

        :param shuffler: The shuffler that permutes the cards
        :return: The shuffled deck
        """
        deck = cls()
        deck.shuffle(shuffler)
        return deck

    def shuffle(self, shuffler: Shuffler):
        """
        Shuffle the cards in the deck.

        :param shuffler: The shuffler that permutes the cards
        """
        shuffler.shuffle(self.cards)
        return self

    @property
    def size(self) -> int:
        """
        Return the number of cards in the deck.

        :return: The size of the deck.
        """
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the deck.

        :return: A string representation of the deck.
        """
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the deck.

        :return: A string representation of the deck.
        """
        return f"Deck of {len(self.cards)} cards"
