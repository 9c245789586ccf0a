"""
Legality rules for Klondike table actions.

Each action kind has its own rules object so that it can be checked and tested
on its own; `KlondikeRules` combines them. A rules object lets action kinds it
does not govern through untouched.
"""

from dataclasses import dataclass
from typing import List

from patience.common.action import Action, AllRules, Rules
from patience.common.card import Card
from patience.klondike.errors import (
    EmptyMoveError,
    FoundationMismatch,
    FoundationMismatchError,
    IllegalDealTargetError,
    IllegalDealTargetFacingError,
    IllegalMoveFromFoundationError,
    IllegalMoveSourceError,
    IllegalMoveTargetError,
    IllegalRevealTargetError,
    IllegalSourceFacingError,
    IllegalTargetFacingError,
    InsufficientCardsError,
    PileOutOfBoundsError,
    TableauMismatch,
    TableauMismatchError,
    TooManyCardsForSourceError,
    TooManyCardsForTargetError,
)
from patience.klondike.settings import Settings
from patience.klondike.table import (
    DealAction,
    MoveAction,
    PileId,
    PileKind,
    RevealAction,
    Table,
)


@dataclass(frozen=True)
class RulesContext:
    """
    Everything the rules may look at, gathered right before a check.

    Attributes:
        settings: The game's settings
        started: Whether play has started
        table: The table the action would be applied to
    """

    settings: Settings
    started: bool
    table: Table


def _check_in_bounds(pile_id: PileId, settings: Settings) -> None:
    if pile_id.index >= settings.tableau_width:
        raise PileOutOfBoundsError(pile_id.index, settings.tableau_width)


class DealRules(Rules):
    """A card may only be dealt face down onto a face-down tableau pile."""

    def check(self, action: Action, context: RulesContext) -> None:
        if not isinstance(action, DealAction):
            return

        target = action.target
        if target.kind != PileKind.TABLEAU:
            raise IllegalDealTargetError(target)
        _check_in_bounds(target, context.settings)

        top_card = context.table.pile(target).top_card()
        if top_card is not None and not top_card.is_face_down():
            raise IllegalDealTargetFacingError(top_card.facing)

    def __repr__(self) -> str:
        return "DealRules()"


class DrawRules(Rules):
    """Drawing from the stock is always allowed."""

    def check(self, action: Action, context: RulesContext) -> None:
        return None

    def __repr__(self) -> str:
        return "DrawRules()"


class MoveRules(Rules):
    """
    Moves of face-up runs between waste, foundations and tableau piles.

    The checks run in a fixed order: the size of the move, the facing of the
    moved run, what the source allows, and finally what the target accepts.
    """

    def check(self, action: Action, context: RulesContext) -> None:
        if not isinstance(action, MoveAction):
            return

        count = action.count
        if count <= 0:
            raise EmptyMoveError()

        source_pile = context.table.pile(action.source)
        moved_cards = source_pile.top_cards(count)
        if len(moved_cards) < count:
            raise InsufficientCardsError(action.source, count, len(source_pile))

        # Checking the bottom card of the run is enough: face-down cards only
        # ever sit underneath face-up ones.
        leading_card = moved_cards[0]
        if not leading_card.is_face_up():
            raise IllegalSourceFacingError(leading_card.facing)

        self._check_source(action.source, count, context.settings)
        self._check_target(action.target, moved_cards, context)

    @staticmethod
    def _check_source(source: PileId, count: int, settings: Settings) -> None:
        match source.kind:
            case PileKind.TABLEAU:
                _check_in_bounds(source, settings)
            case PileKind.FOUNDATION:
                if not settings.allow_move_from_foundation:
                    raise IllegalMoveFromFoundationError(source)
                if count != 1:
                    raise TooManyCardsForSourceError(source, count)
            case PileKind.WASTE:
                if count != 1:
                    raise TooManyCardsForSourceError(source, count)
            case _:
                raise IllegalMoveSourceError(source)

    @staticmethod
    def _check_target(
        target: PileId, moved_cards: List[Card], context: RulesContext
    ) -> None:
        leading_card = moved_cards[0]
        top_card = context.table.pile(target).top_card()

        match target.kind:
            case PileKind.TABLEAU:
                _check_in_bounds(target, context.settings)
                if top_card is None:
                    if not leading_card.is_king():
                        raise TableauMismatchError(
                            leading_card.face, TableauMismatch.START
                        )
                    return
                if not top_card.is_face_up():
                    raise IllegalTargetFacingError(top_card.facing)
                if not top_card.rank.follows(leading_card.rank):
                    raise TableauMismatchError(
                        leading_card.face, TableauMismatch.FOLLOW, top_card.face
                    )
                if top_card.color == leading_card.color:
                    raise TableauMismatchError(
                        leading_card.face, TableauMismatch.COLOR, top_card.face
                    )
            case PileKind.FOUNDATION:
                if len(moved_cards) != 1:
                    raise TooManyCardsForTargetError(target, len(moved_cards))
                if top_card is None:
                    if leading_card.suit != target.suit or not leading_card.is_ace():
                        raise FoundationMismatchError(
                            leading_card.face, FoundationMismatch.START, target.suit
                        )
                    return
                if top_card.suit != leading_card.suit:
                    raise FoundationMismatchError(
                        leading_card.face,
                        FoundationMismatch.SUIT,
                        target.suit,
                        top_card.face,
                    )
                if not leading_card.rank.follows(top_card.rank):
                    raise FoundationMismatchError(
                        leading_card.face,
                        FoundationMismatch.FOLLOW,
                        target.suit,
                        top_card.face,
                    )
            case _:
                raise IllegalMoveTargetError(target)

    def __repr__(self) -> str:
        return "MoveRules()"


class RevealRules(Rules):
    """Only the top card of a tableau pile in play may be revealed."""

    def check(self, action: Action, context: RulesContext) -> None:
        if not isinstance(action, RevealAction):
            return

        if action.target.kind != PileKind.TABLEAU:
            raise IllegalRevealTargetError(action.target)
        _check_in_bounds(action.target, context.settings)

    def __repr__(self) -> str:
        return "RevealRules()"


class KlondikeRules(AllRules):
    """The complete set of Klondike table rules."""

    def __init__(self):
        super().__init__(DealRules(), DrawRules(), MoveRules(), RevealRules())

    def __repr__(self) -> str:
        return "KlondikeRules()"
