"""Team strength estimation and pairing cost matrices."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from .models import BYE_NAME, Game, Team

SELF_COST = 1_000_000.0
"""Cost of pairing a team with itself."""

REMATCH_COST = 100.0
"""Cost added for every earlier meeting of two teams."""

_PINV_TOLERANCE = 1e-10


def _pseudo_inverse(matrix: np.ndarray) -> np.ndarray:
    """Moore-Penrose inverse, dropping singular values below the tolerance."""
    rows, cols = matrix.shape
    if rows == 0 or cols == 0:
        return np.zeros((cols, rows))
    u, s, vt = np.linalg.svd(matrix, full_matrices=False)
    s_inv = np.where(s > _PINV_TOLERANCE, 1.0 / np.where(s > 0, s, 1.0), 0.0)
    return vt.T @ (s_inv[:, None] * u.T)


def calculate_strengths(games: Iterable[Game], teams: Sequence[Team]) -> list[Team]:
    """Estimate team strengths from score margins by least squares.

    Bye games and the bye team are left out of the fit; a bye team with
    strength 0 is always appended to the result.
    """
    real_games = [game for game in games if not game.is_bye()]
    real_teams = [team for team in teams if team.name != BYE_NAME]
    column = {team.name: j for j, team in enumerate(real_teams)}

    design = np.zeros((len(real_games), len(real_teams)))
    margins = np.zeros(len(real_games))
    for i, game in enumerate(real_games):
        if game.team_a in column:
            design[i, column[game.team_a]] += 1.0
        if game.team_b in column:
            design[i, column[game.team_b]] -= 1.0
        margins[i] = float(game.team_a_score - game.team_b_score)

    scores = _pseudo_inverse(design) @ margins
    strengths = [
        Team(team.name, float(score), id=team.id)
        for team, score in zip(real_teams, scores)
    ]
    strengths.append(Team(BYE_NAME, 0.0, id=0))
    return strengths


def cost_matchup(teams: Sequence[Team]) -> np.ndarray:
    """Cost of each pairing: the absolute difference in rank."""
    ranks = np.array([team.rank for team in teams], dtype=float)
    costs = np.abs(ranks[:, None] - ranks[None, :])
    np.fill_diagonal(costs, 0.0)
    return costs


def cost_self(teams: Sequence[Team]) -> np.ndarray:
    """A prohibitive cost on the diagonal so teams do not play themselves."""
    return np.eye(len(teams)) * SELF_COST


def cost_prev_games(teams: Sequence[Team], games: Iterable[Game]) -> np.ndarray:
    """Cost of repeating earlier pairings, added once per earlier game."""
    n = len(teams)
    index = {team.name: i for i, team in enumerate(teams)}
    costs = np.zeros((n, n))
    for game in games:
        try:
            a = index[game.team_a]
            b = index[game.team_b]
        except KeyError as exc:
            raise ValueError(f"game refers to unknown team {exc.args[0]!r}") from None
        costs[a, b] += REMATCH_COST
        costs[b, a] += REMATCH_COST
    return costs