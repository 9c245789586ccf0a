"""
The Klondike dealer.

Dealing lays out the standard triangle: in round r every tableau pile with an
index of at least r receives one face-down card, so pile i ends up with i + 1
cards. Afterwards the top card of every pile is revealed.

The dealer never builds the whole schedule. Its iterator walks a small
position value instead: while dealing, a (column, row) cursor over a triangle
whose rows shrink by one; while revealing, a plain pile index.

>>> actions = list(KlondikeDealer().deal(DealerContext(tableau_width=2)))
>>> [str(action.target) for action in actions]
['Tableau 1', 'Tableau 2', 'Tableau 2', 'Tableau 1', 'Tableau 2']
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from patience.klondike.settings import Settings
from patience.klondike.table import DealAction, PileId, RevealAction, TableAction


@dataclass(frozen=True)
class DealingPosition:
    """
    Cursor over the dealing triangle.

    Row r has `tableau_width - r` columns; the pile dealt to is `column + row`.
    """

    column: int = 0
    row: int = 0

    def step(self, tableau_width: int) -> Optional["DealingPosition"]:
        """The next position, or None once the last row is finished."""
        row_width = tableau_width - self.row
        next_column = (self.column + 1) % row_width
        next_row = self.row + (self.column + 1) // row_width

        if next_row < tableau_width:
            return DealingPosition(column=next_column, row=next_row)
        return None

    @property
    def tableau_index(self) -> int:
        return self.column + self.row


@dataclass(frozen=True)
class RevealingPosition:
    """Cursor over the piles whose top card is still to be revealed."""

    index: int = 0

    def step(self, tableau_width: int) -> Optional["RevealingPosition"]:
        next_index = self.index + 1
        if next_index < tableau_width:
            return RevealingPosition(index=next_index)
        return None

    @property
    def tableau_index(self) -> int:
        return self.index


@dataclass(frozen=True)
class Done:
    """The dealer has nothing left to do."""

    pass


DONE = Done()

DealerState = Union[DealingPosition, RevealingPosition, Done]


def initial_state(tableau_width: int) -> DealerState:
    if tableau_width > 0:
        return DealingPosition()
    return DONE


def state_action(state: DealerState) -> Optional[TableAction]:
    """The table action to perform in the given state."""
    match state:
        case DealingPosition():
            return DealAction(PileId.tableau(state.tableau_index))
        case RevealingPosition():
            return RevealAction(PileId.tableau(state.tableau_index))
        case _:
            return None


def next_state(state: DealerState, tableau_width: int) -> DealerState:
    """The state following the given one."""
    match state:
        case DealingPosition():
            return state.step(tableau_width) or RevealingPosition()
        case RevealingPosition():
            return state.step(tableau_width) or DONE
        case _:
            return DONE


@dataclass(frozen=True)
class DealerContext:
    """What the dealer needs to know about the game."""

    tableau_width: int

    @classmethod
    def from_settings(cls, settings: Settings) -> "DealerContext":
        return cls(tableau_width=settings.tableau_width)


class DealerIterator(Iterator[TableAction]):
    """
    Lazily produces the dealer's table actions, one per call to `next`.
    """

    def __init__(self, tableau_width: int):
        if tableau_width < 0:
            raise ValueError(f"tableau_width must be non-negative, got {tableau_width}")
        self.tableau_width = tableau_width
        self.state: DealerState = initial_state(tableau_width)

    @property
    def done(self) -> bool:
        return isinstance(self.state, Done)

    def __iter__(self) -> "DealerIterator":
        return self

    def __next__(self) -> TableAction:
        action = state_action(self.state)
        if action is None:
            raise StopIteration
        self.state = next_state(self.state, self.tableau_width)
        return action

    def __repr__(self) -> str:
        return f"DealerIterator(tableau_width={self.tableau_width}, state={self.state!r})"


class KlondikeDealer:
    """
    Produces the table actions that set up a Klondike game.

    Every call to `deal` starts over with a fresh iterator.
    """

    def deal(self, context: DealerContext) -> DealerIterator:
        return DealerIterator(context.tableau_width)

    def __repr__(self) -> str:
        return "KlondikeDealer()"
