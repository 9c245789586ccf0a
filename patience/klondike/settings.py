"""Per-game configuration for Klondike."""

from dataclasses import dataclass, fields
from typing import Any, Dict

STANDARD_TABLEAU_WIDTH = 7


@dataclass(frozen=True)
class Settings:
    """
    Immutable Klondike configuration.

    Attributes:
        allow_move_from_foundation: Whether a card may be moved back out of a
            foundation pile
        tableau_width: Number of tableau piles dealt at setup
    """

    allow_move_from_foundation: bool = True
    tableau_width: int = STANDARD_TABLEAU_WIDTH

    def __post_init__(self):
        if not isinstance(self.allow_move_from_foundation, bool):
            raise TypeError(
                f"allow_move_from_foundation must be a bool, "
                f"got {self.allow_move_from_foundation!r}"
            )
        if isinstance(self.tableau_width, bool) or not isinstance(
            self.tableau_width, int
        ):
            raise ValueError(
                f"tableau_width must be an integer, got {self.tableau_width!r}"
            )
        if self.tableau_width < 0:
            raise ValueError(
                f"tableau_width must be non-negative, got {self.tableau_width}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary for serialization."""
        return {
            "allow_move_from_foundation": self.allow_move_from_foundation,
            "tableau_width": self.tableau_width,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Build settings from a dictionary such as the one `to_dict` returns.

        Missing keys keep their defaults.

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**data)
