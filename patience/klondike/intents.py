"""
Player intents: the requests a presentation layer sends to a Klondike game.

Intents say what the player wants, not how the table changes. `Game.perform`
turns each one into table and selection actions.
"""

from dataclasses import dataclass

from patience.klondike.table import PileId


class Intent:
    """Base class for player intents."""

    pass


@dataclass(frozen=True)
class Start(Intent):
    """Finish setting up and begin play."""


@dataclass(frozen=True)
class Clear(Intent):
    """Throw the current deal away and start over with a fresh deck."""


@dataclass(frozen=True)
class Deal(Intent):
    """Perform the dealer's next setup step."""


@dataclass(frozen=True)
class GoTo(Intent):
    """Move the selection cursor to a pile."""

    pile: PileId


@dataclass(frozen=True)
class SelectMore(Intent):
    """Hold one more card."""


@dataclass(frozen=True)
class SelectLess(Intent):
    """Hold one card fewer."""


@dataclass(frozen=True)
class SelectAll(Intent):
    """Hold every face-up card at the top of the selected pile."""


@dataclass(frozen=True)
class PlaceMove(Intent):
    """Put the held cards on the selected pile."""


@dataclass(frozen=True)
class SendToFoundation(Intent):
    """Move the top card of the source pile to its foundation."""


@dataclass(frozen=True)
class TakeFromWaste(Intent):
    """Hold the top card of the waste."""


@dataclass(frozen=True)
class CancelMove(Intent):
    """Put the held cards back."""


@dataclass(frozen=True)
class Draw(Intent):
    """Turn cards over from the stock, or recycle the waste."""

    count: int = 1

    def __post_init__(self):
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise ValueError(f"Draw count must be an integer, got {self.count!r}")
        if self.count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {self.count}")


@dataclass(frozen=True)
class Reveal(Intent):
    """Turn over the top card of the selected pile."""
