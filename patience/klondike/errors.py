"""
Errors raised while applying Klondike table actions.

Rule violations derive from `RuleViolation` and are raised before the table is
touched. Action failures derive from `ActionError` and are raised by the table
actions themselves, also before any mutation.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from patience.common.action import ActionError, RuleViolation
from patience.common.card import CardFace, Facing, Suit

if TYPE_CHECKING:
    from patience.klondike.table import PileId


class TableauMismatch(Enum):
    """Why a run of cards cannot be placed on a tableau pile."""

    START = "an empty tableau pile must start with a King"
    FOLLOW = "the target card must be one rank higher"
    COLOR = "the target card must be of the other color"


class FoundationMismatch(Enum):
    """Why a card cannot be placed on a foundation pile."""

    START = "an empty foundation must start with its own Ace"
    SUIT = "the card must match the foundation's suit"
    FOLLOW = "the card must be one rank higher than the foundation's top"


class PileOutOfBoundsError(RuleViolation):
    """Raised when a tableau index is not below the tableau width."""

    def __init__(self, index: int, width: int):
        self.index = index
        self.width = width
        super().__init__(f"Tableau {index + 1} is out of bounds (width {width})")


class IllegalDealTargetError(RuleViolation):
    """Raised when a card is dealt to anything but a tableau pile."""

    def __init__(self, pile_id: "PileId"):
        self.pile_id = pile_id
        super().__init__(f"Cannot deal to {pile_id}")


class IllegalDealTargetFacingError(RuleViolation):
    """Raised when a card is dealt onto a pile whose top card is already revealed."""

    def __init__(self, facing: Facing):
        self.facing = facing
        super().__init__(f"Cannot deal onto a card that is {facing}")


class EmptyMoveError(RuleViolation):
    """Raised when a move of zero cards is attempted."""

    def __init__(self):
        super().__init__("Cannot move zero cards")


class InsufficientCardsError(RuleViolation):
    """Raised when a move asks for more cards than the source pile holds."""

    def __init__(self, pile_id: "PileId", requested: int, available: int):
        self.pile_id = pile_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"{pile_id} holds {available} card(s), cannot move {requested}"
        )


class IllegalSourceFacingError(RuleViolation):
    """Raised when the bottom card of the moved run is not face up."""

    def __init__(self, facing: Facing):
        self.facing = facing
        super().__init__(f"Cannot move a card that is {facing}")


class IllegalMoveFromFoundationError(RuleViolation):
    """Raised when cards are moved out of a foundation and the settings forbid it."""

    def __init__(self, pile_id: "PileId"):
        self.pile_id = pile_id
        super().__init__(f"Moving cards out of {pile_id} is not allowed")


class IllegalMoveSourceError(RuleViolation):
    """Raised when cards are moved out of a pile that never gives up cards."""

    def __init__(self, pile_id: "PileId"):
        self.pile_id = pile_id
        super().__init__(f"Cannot move cards from {pile_id}")


class IllegalMoveTargetError(RuleViolation):
    """Raised when cards are moved onto a pile that never accepts them."""

    def __init__(self, pile_id: "PileId"):
        self.pile_id = pile_id
        super().__init__(f"Cannot move cards to {pile_id}")


class IllegalTargetFacingError(RuleViolation):
    """Raised when cards are moved onto a face-down card."""

    def __init__(self, facing: Facing):
        self.facing = facing
        super().__init__(f"Cannot move cards onto a card that is {facing}")


class TooManyCardsForSourceError(RuleViolation):
    """Raised when more than one card is taken from a single-card source."""

    def __init__(self, pile_id: "PileId", count: int):
        self.pile_id = pile_id
        self.count = count
        super().__init__(f"Only one card at a time may leave {pile_id}, not {count}")


class TooManyCardsForTargetError(RuleViolation):
    """Raised when more than one card is placed on a single-card target."""

    def __init__(self, pile_id: "PileId", count: int):
        self.pile_id = pile_id
        self.count = count
        super().__init__(f"Only one card at a time may go to {pile_id}, not {count}")


class TableauMismatchError(RuleViolation):
    """Raised when a run does not fit on a tableau pile."""

    def __init__(
        self,
        card: CardFace,
        mismatch: TableauMismatch,
        target_card: Optional[CardFace] = None,
    ):
        self.card = card
        self.mismatch = mismatch
        self.target_card = target_card
        if target_card is None:
            message = f"Cannot place {card} on an empty tableau: {mismatch.value}"
        else:
            message = f"Cannot place {card} on {target_card}: {mismatch.value}"
        super().__init__(message)


class FoundationMismatchError(RuleViolation):
    """Raised when a card does not fit on a foundation pile."""

    def __init__(
        self,
        card: CardFace,
        mismatch: FoundationMismatch,
        suit: Suit,
        target_card: Optional[CardFace] = None,
    ):
        self.card = card
        self.mismatch = mismatch
        self.suit = suit
        self.target_card = target_card
        super().__init__(
            f"Cannot place {card} on the {suit.name.title()} foundation: "
            f"{mismatch.value}"
        )


class IllegalRevealTargetError(RuleViolation):
    """Raised when a card is revealed anywhere but on a tableau pile."""

    def __init__(self, pile_id: "PileId"):
        self.pile_id = pile_id
        super().__init__(f"Cannot reveal the top card of {pile_id}")


class StockExhaustedError(ActionError):
    """Raised when a card is dealt from an empty stock."""

    def __init__(self):
        super().__init__("The stock is empty")


class NothingToMoveError(ActionError):
    """Raised when a move of zero or fewer cards is applied."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Cannot move {count} card(s)")


class PileUnderflowError(ActionError):
    """Raised when an action takes more cards than a pile holds."""

    def __init__(self, pile_id: "PileId", requested: int, available: int):
        self.pile_id = pile_id
        self.requested = requested
        self.available = available
        super().__init__(f"Cannot take {requested} card(s) from {pile_id}: only {available}")
