"""Optimal pairing of teams as a binary integer program."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from .models import Game, Team


def pair_teams(teams: Sequence[Team], costs: np.ndarray) -> list[Game]:
    """Pair teams so that the total pairing cost is minimal.

    Each team is matched exactly once and pairings are symmetric. A team
    matched with itself (possible only for an odd count) gets no game.
    Returned games have no round or field set yet.
    """
    n = len(teams)
    costs = np.asarray(costs, dtype=float)
    if costs.shape != (n, n):
        raise ValueError(f"cost matrix must be {n}x{n}, got {costs.shape}")
    if n == 0:
        return []

    size = n * n
    rows = []
    for i in range(n):
        row = np.zeros(size)
        row[i * n:(i + 1) * n] = 1.0
        rows.append(row)
    for j in range(n):
        col = np.zeros(size)
        col[j::n] = 1.0
        rows.append(col)
    assignment = LinearConstraint(np.array(rows), 1.0, 1.0)

    constraints = [assignment]
    symmetric = []
    for i in range(n):
        for j in range(i + 1, n):
            row = np.zeros(size)
            row[i * n + j] = 1.0
            row[j * n + i] = -1.0
            symmetric.append(row)
    if symmetric:
        constraints.append(LinearConstraint(np.array(symmetric), 0.0, 0.0))

    result = milp(
        c=costs.ravel(),
        constraints=constraints,
        integrality=np.ones(size),
        bounds=Bounds(0.0, 1.0),
    )
    if not result.success or result.x is None:
        raise RuntimeError(f"pairing optimisation failed: {result.message}")

    chosen = np.rint(result.x).reshape(n, n)
    return [
        Game(teams[i].name, teams[j].name)
        for i in range(n)
        for j in range(i + 1, n)
        if chosen[i, j] == 1.0
    ]