"""Core records of a Swiss draw: teams and games."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

BYE_NAME = "_BYE_"
"""Name of the placeholder team that pads an odd field of teams."""


def _random_id() -> int:
    """Return a random signed 64-bit identifier."""
    return random.getrandbits(64) - 2**63


@dataclass
class Team:
    """A team taking part in a draw, with its current rank or strength."""

    name: str
    rank: float = 0.0
    id: int = field(default_factory=_random_id)


@dataclass
class Game:
    """One match between two teams in a given round and on a given field."""

    team_a: str
    team_b: str
    field: int = 0
    round: int = 0
    team_a_score: int = 0
    team_b_score: int = 0
    streamed: bool = False
    played: bool = False
    id: int = field(default_factory=_random_id)

    def is_bye(self) -> bool:
        """Return True if either side of the game is the bye placeholder."""
        return BYE_NAME in (self.team_a, self.team_b)