"""
The player's selection cursor.

A selection always points at a target pile. It is either *visual*, only
highlighting the target, or *held*, carrying a number of cards picked up from
a source pile until they are placed somewhere. Source and target may be the
same pile.
"""

from dataclasses import dataclass
from typing import Optional, Union

from patience.common.action import Action
from patience.klondike.table import PileId


@dataclass(frozen=True)
class Visual:
    """Nothing is held."""

    @property
    def source(self) -> Optional[PileId]:
        return None

    @property
    def count(self) -> int:
        return 0


@dataclass(frozen=True)
class Held:
    """`extra_count + 1` cards are held from `source`."""

    source: PileId
    extra_count: int = 0

    @property
    def count(self) -> int:
        return self.extra_count + 1


SelectionState = Union[Visual, Held]


def resize_state(
    state: SelectionState, new_count: int, current_target: PileId
) -> SelectionState:
    """
    Hold `new_count` cards, keeping the current source or, if nothing is held,
    taking them from the current target. Holding zero cards drops back to a
    visual selection.
    """
    if new_count <= 0:
        return Visual()
    source = state.source if state.source is not None else current_target
    return Held(source=source, extra_count=new_count - 1)


class Selection:
    """
    Player-intent cursor over the table's piles.
    """

    def __init__(self, target: Optional[PileId] = None):
        self.target: PileId = target if target is not None else PileId.stock()
        self.state: SelectionState = Visual()

    @property
    def source(self) -> PileId:
        """The pile the held cards come from, or the target if nothing is held."""
        source = self.state.source
        return source if source is not None else self.target

    @property
    def count(self) -> int:
        """Number of cards held."""
        return self.state.count

    def is_held(self) -> bool:
        return isinstance(self.state, Held)

    def to_dict(self):
        return {
            "target": str(self.target),
            "source": str(self.source),
            "count": self.count,
            "held": self.is_held(),
        }

    def __repr__(self) -> str:
        return f"Selection(target={self.target!r}, state={self.state!r})"


class SelectionAction(Action[Selection]):
    """Base class for actions that change a selection. They never fail."""

    pass


@dataclass(frozen=True)
class GoToAction(SelectionAction):
    """Point the selection at a new target, keeping whatever is held."""

    target: PileId

    def apply_to(self, selection: Selection) -> None:
        selection.target = self.target


@dataclass(frozen=True)
class HoldAction(SelectionAction):
    """Hold `count` cards from `source`, replacing whatever was held before."""

    source: PileId
    count: int

    def apply_to(self, selection: Selection) -> None:
        state = resize_state(selection.state, self.count, selection.target)
        if isinstance(state, Held):
            state = Held(source=self.source, extra_count=state.extra_count)
        selection.state = state


@dataclass(frozen=True)
class ResizeAction(SelectionAction):
    """Change how many cards are held; zero releases the selection."""

    count: int

    def apply_to(self, selection: Selection) -> None:
        selection.state = resize_state(selection.state, self.count, selection.target)


@dataclass(frozen=True)
class ReturnAction(SelectionAction):
    """Put the held cards back: the target snaps to the source and nothing is held."""

    def apply_to(self, selection: Selection) -> None:
        if selection.state.source is not None:
            selection.target = selection.state.source
        selection.state = Visual()
