"""A Swiss draw: teams, games played so far and the pairing of new rounds."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from os import PathLike

import numpy as np

from .models import BYE_NAME, Game, Team, _random_id
from .optimizer import pair_teams
from .ratings import calculate_strengths, cost_matchup, cost_prev_games, cost_self

logger = logging.getLogger(__name__)


class DrawNotReadyError(Exception):
    """Raised when a new round is requested before all games are played."""


def _required(row: dict[str, str | None], key: str) -> str:
    value = row.get(key)
    if value is None:
        raise ValueError(f"missing field {key!r}")
    return value


def _game_from_row(row: dict[str, str | None], game_id: int) -> Game:
    round_text = row.get("round")
    round_no = 1 if round_text is None or round_text.strip() == "" else int(round_text)
    _required(row, "field")
    return Game(
        team_a=_required(row, "teamA"),
        team_b=_required(row, "teamB"),
        field=1,
        round=round_no,
        team_a_score=int(_required(row, "teamAScore")),
        team_b_score=int(_required(row, "teamBScore")),
        streamed=False,
        played=True,
        id=game_id,
    )


@dataclass
class SwissDraw:
    """State of one Swiss draw tournament."""

    id: int = field(default_factory=_random_id)
    name: str = ""
    round: int = 0
    teams: list[Team] = field(default_factory=list)
    latest_rank: list[Team] = field(default_factory=list)
    games: list[Game] = field(default_factory=list)

    def add_game(self, game: Game) -> None:
        """Append a game to the draw."""
        self.games.append(game)

    def add_team(self, name: str, rank: float) -> Team:
        """Add a new team with a random id and return it."""
        team = Team(name, rank)
        self.teams.append(team)
        return team

    def add_teams(self, teams: Iterable[Team]) -> None:
        """Append several teams to the draw."""
        self.teams.extend(teams)

    def add_teams_from_games(self, rank: float) -> list[Team]:
        """Add every team named in the games, each once, with the given rank.

        Teams are taken first from the A sides and then from the B sides,
        in order of first appearance.
        """
        names = [game.team_a for game in self.games] + [game.team_b for game in self.games]
        added = [self.add_team(name, rank) for name in dict.fromkeys(names)]
        return added

    def edit_game_scores(self, game_id: int, team_a_score: int, team_b_score: int) -> None:
        """Record the scores of the game with the given id and mark it played."""
        for game in self.games:
            if game.id == game_id:
                game.team_a_score = team_a_score
                game.team_b_score = team_b_score
                game.played = True

    def compute_strengths(self) -> list[Team]:
        """Rank teams from strongest to weakest and remember the ranking.

        Before any round the initial ranks are used; afterwards strengths
        are estimated from the score margins of the games.
        """
        if self.round == 0:
            source = list(self.teams)
        else:
            source = calculate_strengths(self.games, self.teams)
            logger.debug("strengths: %s", source)
        strengths = sorted(source, key=lambda team: team.rank, reverse=True)
        self.latest_rank = list(strengths)
        return strengths

    def cost_matrix(self) -> np.ndarray:
        """Pairing costs between the teams in the order of their strengths."""
        strengths = self.compute_strengths()
        return cost_matchup(strengths) + cost_self(strengths) + cost_prev_games(strengths, self.games)

    def check_draw(self) -> None:
        """Pad an odd field with a bye team and require every game to be played."""
        if len(self.teams) % 2 == 1:
            self.teams.append(Team(BYE_NAME, 0.0, id=0))
        for game in self.games:
            if not game.played:
                raise DrawNotReadyError(
                    f"game {game.team_a} vs {game.team_b} has not been played"
                )

    def run_draw(self) -> list[Game]:
        """Pair the teams for the next round, add those games and return them."""
        self.check_draw()
        strengths = self.compute_strengths()
        costs = self.cost_matrix()
        pairings = pair_teams(strengths, costs)

        self.round += 1
        for field_no, game in enumerate(pairings, start=1):
            game.round = self.round
            if game.is_bye():
                game.team_a_score = 0
                game.team_b_score = 0
                game.played = True
                game.streamed = False
            game.field = field_no
            self.add_game(game)
        return pairings

    def load_games_csv(self, path: str | PathLike[str]) -> int:
        """Load played games from a CSV file and return how many were added.

        The header must name teamA, teamB, teamAScore, teamBScore and field;
        round is optional and defaults to 1. Rows that cannot be read are
        skipped with a warning.
        """
        next_id = len(self.games) + 1
        loaded = 0
        with open(path, newline="", encoding="utf-8") as handle:
            for line_no, row in enumerate(csv.DictReader(handle), start=2):
                try:
                    game = _game_from_row(row, next_id)
                except ValueError as exc:
                    logger.warning("CSV parse error on line %d: %s", line_no, exc)
                    continue
                self.games.append(game)
                next_id += 1
                loaded += 1
        return loaded

    def current_round_games(self) -> list[Game]:
        """Games belonging to the current round."""
        return [game for game in self.games if game.round == self.round]