"""
Klondike patience module.

This module provides the Klondike rules engine: the table model, the dealer,
the legality rules, the selection cursor and the game interpreter.
"""

from patience.klondike.dealer import (
    DealerContext as DealerContext,
    KlondikeDealer as KlondikeDealer,
)
from patience.klondike.game import Game as Game
from patience.klondike.rules import (
    KlondikeRules as KlondikeRules,
    RulesContext as RulesContext,
)
from patience.klondike.selection import Selection as Selection
from patience.klondike.settings import Settings as Settings
from patience.klondike.table import (
    DealAction as DealAction,
    DrawAction as DrawAction,
    MoveAction as MoveAction,
    PileId as PileId,
    PileKind as PileKind,
    RevealAction as RevealAction,
    Table as Table,
)

__all__ = [
    "DealerContext",
    "KlondikeDealer",
    "Game",
    "KlondikeRules",
    "RulesContext",
    "Selection",
    "Settings",
    "DealAction",
    "DrawAction",
    "MoveAction",
    "PileId",
    "PileKind",
    "RevealAction",
    "Table",
]
