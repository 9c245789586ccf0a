"""
The Klondike game interpreter.

A `Game` owns the settings, the table, the player's selection and, while the
game is being set up, the dealer's progress. Player intents come in through
`perform`; every change to the table goes through the rules guard, so an
illegal request leaves the table exactly as it was.
"""

import logging
import time
import uuid
from typing import Any, Dict, Iterable, Optional

from patience.common.action import ActionError, Rules, RulesGuard, RuleViolation
from patience.common.deck import Deck, RandomShuffler, Shuffler
from patience.events import EngineEventType, EventBus, EventEmitter
from patience.klondike import intents
from patience.klondike.dealer import DealerContext, DealerIterator, KlondikeDealer
from patience.klondike.rules import KlondikeRules, RulesContext
from patience.klondike.selection import (
    GoToAction,
    HoldAction,
    ResizeAction,
    ReturnAction,
    Selection,
    SelectionAction,
)
from patience.klondike.settings import Settings
from patience.klondike.table import (
    DealAction,
    DrawAction,
    MoveAction,
    PileId,
    RevealAction,
    Table,
    TableAction,
)

logger = logging.getLogger(__name__)


class Game:
    """
    A single Klondike session.

    Args:
        settings: Game configuration, standard Klondike by default
        shuffler: Permutes each fresh deck; a randomly seeded shuffler by default
        rules: Rules guarding the table, the Klondike rules by default
        dealer: Produces the setup actions, the Klondike dealer by default
        event_emitter: Where state changes are published, the global bus by default
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        shuffler: Optional[Shuffler] = None,
        rules: Optional[Rules] = None,
        dealer: Optional[KlondikeDealer] = None,
        event_emitter: Optional[EventEmitter] = None,
    ):
        self.id = str(uuid.uuid4())
        self._settings = settings if settings is not None else Settings()
        self._shuffler = shuffler if shuffler is not None else RandomShuffler()
        self._dealer = dealer if dealer is not None else KlondikeDealer()
        self._dealer_iter: Optional[DealerIterator] = None
        self._started = False
        self._table_guard = RulesGuard(
            rules if rules is not None else KlondikeRules(), self._new_table()
        )
        self._selection = Selection()
        self.event_bus = (
            event_emitter if event_emitter is not None else EventBus.get_instance()
        )

        self._emit(
            EngineEventType.GAME_CREATED, {"settings": self._settings.to_dict()}
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def rules(self) -> Rules:
        return self._table_guard.rules

    @property
    def table(self) -> Table:
        return self._table_guard.target

    @property
    def selection(self) -> Selection:
        return self._selection

    def is_started(self) -> bool:
        return self._started

    def is_dealing_complete(self) -> bool:
        """True once the dealer has produced every setup action."""
        return self._dealer_iter is not None and self._dealer_iter.done

    def rules_context(self) -> RulesContext:
        return RulesContext(
            settings=self._settings, started=self._started, table=self.table
        )

    def perform(self, intent: intents.Intent) -> None:
        """
        Carry out a player intent.

        Raises:
            RuleViolation: If the table action the intent resolves to is illegal.
                The table is unchanged, but selection changes that always
                accompany the intent still happen.
            ActionError: If a legal table action could not be applied.
            ValueError: If the intent is not recognised, or carries an argument
                the matching action rejects (such as a negative draw count).
        """
        logger.debug("Performing %r", intent)

        match intent:
            case intents.Start():
                self._start()
            case intents.Clear():
                self._clear()
            case intents.Deal():
                self.deal_next()
            case intents.GoTo(pile=pile):
                self.apply_selection_action(GoToAction(pile))
            case intents.SelectAll():
                count = self.table.pile(self._selection.target).face_up_count()
                self.apply_selection_action(ResizeAction(count))
            case intents.SelectMore():
                self.apply_selection_action(ResizeAction(self._selection.count + 1))
            case intents.SelectLess():
                self.apply_selection_action(
                    ResizeAction(max(self._selection.count - 1, 0))
                )
            case intents.PlaceMove():
                self._place_move()
            case intents.SendToFoundation():
                self._send_to_foundation()
            case intents.TakeFromWaste():
                self.apply_selection_action(HoldAction(PileId.waste(), 1))
            case intents.CancelMove():
                self.apply_selection_action(ReturnAction())
            case intents.Draw(count=count):
                self.apply_table_action(DrawAction(count))
            case intents.Reveal():
                self.apply_table_action(RevealAction(self._selection.target))
            case _:
                raise ValueError(f"Unknown intent: {intent!r}")

    def perform_all(self, intent_list: Iterable[intents.Intent]) -> None:
        """Perform intents in order, stopping at the first one that fails."""
        for intent in intent_list:
            self.perform(intent)

    def deal_next(self) -> Optional[TableAction]:
        """
        Apply the dealer's next setup action, if there is one.

        Returns:
            The action applied, or None once dealing is complete
        """
        if self._dealer_iter is None:
            context = DealerContext.from_settings(self._settings)
            self._dealer_iter = self._dealer.deal(context)

        action = next(self._dealer_iter, None)
        if action is not None:
            self.apply_table_action(action)
        return action

    def finish_dealing(self) -> int:
        """
        Apply every remaining setup action.

        Returns:
            Number of actions applied
        """
        applied = 0
        while self.deal_next() is not None:
            applied += 1
        return applied

    def apply_table_action(self, action: TableAction) -> None:
        """
        Apply a table action through the rules guard.

        Raises:
            RuleViolation: If the rules reject the action
            ActionError: If the action could not be applied
        """
        recycles = isinstance(action, DrawAction) and action.recycles(self.table)

        try:
            self._table_guard.apply_guarded(action, self.rules_context())
        except RuleViolation as e:
            logger.info("Rejected %r: %s", action, e)
            self._emit(
                EngineEventType.ACTION_REJECTED,
                {"action": repr(action), "error": type(e).__name__, "reason": str(e)},
            )
            raise
        except ActionError as e:
            logger.warning("Could not apply %r: %s", action, e)
            self._emit(
                EngineEventType.ACTION_FAILED,
                {"action": repr(action), "error": type(e).__name__, "reason": str(e)},
            )
            raise

        self._emit_applied(action, recycles)

    def apply_selection_action(self, action: SelectionAction) -> None:
        action.apply_to(self._selection)
        self._emit(EngineEventType.SELECTION_CHANGED, self._selection.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game
        """
        return {
            "id": self.id,
            "started": self._started,
            "settings": self._settings.to_dict(),
            "table": self.table.to_dict(),
            "selection": self._selection.to_dict(),
        }

    def _start(self) -> None:
        self._started = True
        logger.info("Game %s started", self.id)
        self._emit(EngineEventType.GAME_STARTED, {})

    def _clear(self) -> None:
        self._dealer_iter = None
        self._table_guard.set_target(self._new_table())
        self._started = False
        logger.info("Game %s cleared", self.id)
        self._emit(EngineEventType.GAME_CLEARED, {})

    def _place_move(self) -> None:
        source = self._selection.source
        target = self._selection.target
        count = self._selection.count

        try:
            if source != target:
                self.apply_table_action(MoveAction(source, target, count))
        finally:
            # The held cards are released whether or not the move went through.
            self.apply_selection_action(ResizeAction(0))

    def _send_to_foundation(self) -> None:
        source = self._selection.source
        count = self._selection.count
        top_card = self.table.pile(source).top_card()

        try:
            if top_card is not None:
                self.apply_table_action(
                    MoveAction(source, PileId.foundation(top_card.suit), 1)
                )
        finally:
            self.apply_selection_action(ResizeAction(max(count - 1, 0)))

    def _new_table(self) -> Table:
        return Table.from_deck(Deck.shuffled(self._shuffler))

    def _emit_applied(self, action: TableAction, recycled: bool) -> None:
        match action:
            case DealAction(target=target):
                self._emit(EngineEventType.CARD_DEALT, {"target": str(target)})
            case RevealAction(target=target):
                top_card = self.table.pile(target).top_card()
                self._emit(
                    EngineEventType.CARD_REVEALED,
                    {
                        "target": str(target),
                        "card": str(top_card) if top_card is not None else None,
                    },
                )
            case MoveAction(source=source, target=target, count=count):
                self._emit(
                    EngineEventType.CARDS_MOVED,
                    {"source": str(source), "target": str(target), "count": count},
                )
            case DrawAction(count=count):
                if recycled:
                    self._emit(
                        EngineEventType.STOCK_RECYCLED,
                        {"stock_size": len(self.table.stock)},
                    )
                else:
                    self._emit(
                        EngineEventType.CARDS_DRAWN,
                        {"count": count, "waste_size": len(self.table.waste)},
                    )

    def _emit(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        payload = {"game_id": self.id, "timestamp": time.time()}
        payload.update(data)
        self.event_bus.emit(event_type, payload)

    def __repr__(self) -> str:
        return (
            f"Game(id={self.id!r}, started={self._started}, "
            f"settings={self._settings!r})"
        )
