# swissdraw

Run a Swiss-draw tournament: enter teams with a seeding rank, let the
package pair them round by round, record the scores, and keep the whole
draw in a local SQLite database.

## How pairing works

- While a draw is at round 0, teams are ordered by their seeding rank,
  highest first.
- From round 1 on, every team is rated from the score margins of the
  games played so far (a least-squares fit over all results, computed
  with a pseudo-inverse), and teams are ordered by that rating. Bye games
  are left out of the fit, and a `_BYE_` team rated 0 is always part of
  the result.
- Pairing is solved as a binary integer program over a cost matrix
  (`swissdraw.optimizer.pair_teams`, using SciPy's `milp`): pairing a team
  with itself costs 1,000,000, pairing two teams costs the absolute
  difference of their ratings, and each earlier meeting of the two teams
  adds 100.
- With an odd number of teams a `_BYE_` team (id 0, rank 0) is added to
  the draw. Bye games are marked as played with a 0–0 score.
- A new round can only be drawn once every game of the draw has been
  played; otherwise `swissdraw.draw.DrawNotReadyError` is raised.
- New games get field numbers 1, 2, 3, … in the order they were paired.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `swissdraw` command:

```
swissdraw --help
```

Its subcommands:

- `swissdraw score RESULTS.csv` — rate the teams found in a CSV of game
  results and print them strongest first, with the rating to three
  decimals. The `_BYE_` team is not printed.
- `swissdraw new NAME TEAM=RANK TEAM=RANK ...` — create a draw with at
  least two teams and store it; prints the new draw's id. A team given
  without `=RANK` gets rank 0.
- `swissdraw pair DRAW_ID` — pair the teams for the next round, store the
  games and print them.
- `swissdraw scores DRAW_ID [GAME_ID=A:B ...]` — print the games of the
  current round with their ids; with results given, record those scores
  first. Only games of the current round can be scored.

`new`, `pair` and `scores` take `--db PATH` to use a database file other
than the default one. Errors are printed as `error: ...` and the command
exits with status 1.

A typical session:

```
swissdraw new "Autumn League" Hawks=4 Owls=3 Kites=2 Crows=1
swissdraw pair 1234567890
swissdraw scores 1234567890 111=13:9 222=11:13
swissdraw pair 1234567890
```

(The draw id and game ids are the ones printed by the earlier commands.)

## Library use

```python
from swissdraw.draw import SwissDraw

draw = SwissDraw(name="Autumn League")
for name, rank in [("Hawks", 4.0), ("Owls", 3.0), ("Kites", 2.0), ("Crows", 1.0)]:
    draw.add_team(name, rank)

draw.run_draw()
for game in draw.current_round_games():
    print(game.field, game.team_a, "vs", game.team_b)

# Record results, then draw the next round.
for game in draw.current_round_games():
    draw.edit_game_scores(game.id, 13, 9)
draw.run_draw()
```

`Team` and `Game` are dataclasses in `swissdraw.models`; `Game.is_bye()`
tells whether either side is the bye team. `compute_strengths()` returns
the teams sorted from strongest to weakest and keeps that list in
`latest_rank`; `cost_matrix()` gives the pairing costs in the same order.
`swissdraw.cli.format_rankings` renders a list of teams as a table.

### Rating past results

Results from an earlier tournament can be loaded from a CSV file and
rated without drawing anything. The draw must be past round 0 for
ratings to come from the results:

```python
from swissdraw.draw import SwissDraw

draw = SwissDraw(round=1)
draw.load_games_csv("results.csv")
draw.add_teams_from_games(1.0)
for team in draw.compute_strengths():
    print(f"{team.name:20} {team.rank:.3f}")
```

The CSV needs a header row with the columns `teamA`, `teamB`,
`teamAScore`, `teamBScore` and `field`, and may have a `round` column
(empty or missing means 1). Loaded games are marked as played, on field 1,
with ids continuing from the games already in the draw. Rows that cannot
be read are skipped with a logged warning; `load_games_csv` returns the
number of games added.

### Storage

Draws, teams and games are kept in SQLite (`swissdraw.storage`).
`default_db_path()` gives the per-user data location and creates its
directory; `open_database` opens a file (the default one when no path is
given) and creates the tables when they are missing.

```python
from swissdraw.storage import load_draw, open_database, sync_draw

conn = open_database()
sync_draw(conn, draw)              # inserts a new draw or updates a stored one
same_draw = load_draw(conn, draw.id)
```

A loaded draw's round is the highest round among its stored games (0 when
it has none). Games removed from a draw are not erased from the database;
they are flagged as deleted and no longer loaded. Loading an unknown draw
raises `DrawNotFoundError`.

## What it does not do

There is no graphical or web interface: draws are created, paired and
scored from the command line or from Python. A new draw's teams are given
on the command line or added in code; there is no import of a team list
from a file.