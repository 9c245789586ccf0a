"""
Generic guarded-action framework.

An `Action` knows how to apply itself to a target. A `Rules` object decides
whether an action is legal in a given context. A `RulesGuard` owns a target
and only lets an action reach it once the rules have accepted the action.

Rules report a rejected action by raising a `RuleViolation`; actions report a
mechanical failure by raising an `ActionError`. Both derive from `GuardError`
so callers can handle either or both.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GuardError(Exception):
    """Base class for everything that can go wrong applying a guarded action."""

    pass


class RuleViolation(GuardError):
    """Raised when an action is well-formed but not allowed by the rules."""

    pass


class ActionError(GuardError):
    """Raised when an action could not be applied to its target."""

    pass


class SelectionError(ActionError):
    """Raised when a selection action cannot be applied."""

    pass


class Action(ABC, Generic[T]):
    """
    An operation that mutates a target.
    """

    @abstractmethod
    def apply_to(self, target: T) -> None:
        """
        Apply this action to the target.

        Args:
            target: The object to mutate

        Raises:
            ActionError: If the action cannot be applied. Implementations must
                raise before mutating the target.
        """
        pass


class Rules(ABC):
    """
    A legality check for actions.
    """

    @abstractmethod
    def check(self, action: Action, context: Any) -> None:
        """
        Check whether an action is legal.

        Args:
            action: The action about to be applied
            context: Read-only view of everything the rules need, including
                the target's current state

        Raises:
            RuleViolation: If the action is not allowed
        """
        pass


class AllowAll(Rules):
    """Rules that accept every action."""

    def check(self, action: Action, context: Any) -> None:
        return None


class AllRules(Rules):
    """
    Rules that accept an action only if every constituent accepts it.

    Constituents are checked in order; the first violation is raised.
    """

    def __init__(self, *rules: Rules):
        self.rules = tuple(rules)

    def check(self, action: Action, context: Any) -> None:
        for rules in self.rules:
            rules.check(action, context)

    def __repr__(self) -> str:
        return f"AllRules({', '.join(repr(r) for r in self.rules)})"


class RulesGuard(Generic[T]):
    """
    Couples a target with the rules that govern changes to it.

    Args:
        rules: The rules every action must pass
        target: The object the actions are applied to
    """

    def __init__(self, rules: Rules, target: T):
        self._rules = rules
        self._target = target

    @property
    def rules(self) -> Rules:
        return self._rules

    @property
    def target(self) -> T:
        return self._target

    def set_target(self, target: T) -> None:
        """Replace the guarded target."""
        self._target = target

    def apply_guarded(self, action: Action[T], context: Any) -> None:
        """
        Check an action against the rules and apply it if it is legal.

        Args:
            action: The action to apply
            context: Context handed to the rules

        Raises:
            RuleViolation: If the rules reject the action. The target is not
                touched.
            ActionError: If the action passed the rules but could not be applied.
        """
        logger.debug("Checking %r", action)
        self._rules.check(action, context)
        action.apply_to(self._target)
        logger.debug("Applied %r", action)


def apply_all(target: T, actions: Iterable[Action[T]]) -> None:
    """
    Apply a sequence of actions to a target without any rule check.

    Stops at the first action that raises.
    """
    for action in actions:
        action.apply_to(target)
