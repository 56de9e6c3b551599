"""SQLite persistence of Swiss draws."""

from __future__ import annotations

import sqlite3
import time
from os import PathLike
from pathlib import Path

from platformdirs import user_data_dir

from .draw import SwissDraw
from .models import Game, Team

_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS draw (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        last_modified DateTime DEFAULT CURRENT_TIMESTAMP
    )""",
    """CREATE TABLE IF NOT EXISTS teams (
        sd_id INTEGER,
        id INTEGER PRIMARY KEY,
        name TEXT,
        rank REAL
    )""",
    """CREATE TABLE IF NOT EXISTS games (
        sd_id INTEGER,
        id INTEGER PRIMARY KEY,
        round INTEGER,
        team_a_id TEXT NOT NULL,
        team_b_id TEXT NOT NULL,
        team_a_score INTEGER,
        team_b_score INTEGER,
        field INTEGER,
        played BOOLEAN DEFAULT FALSE,
        streamed BOOLEAN DEFAULT FALSE,
        _meta__is_current BOOLEAN DEFAULT TRUE,
        _meta__is_deleted BOOLEAN DEFAULT FALSE,
        _meta__last_modified DateTime DEFAULT CURRENT_TIMESTAMP
    )""",
)

_INSERT_TEAM = "INSERT INTO teams (sd_id, id, name, rank) VALUES (?, ?, ?, ?)"
_INSERT_GAME = (
    "INSERT INTO games (sd_id, id, round, field, team_a_id, team_b_id, team_a_score, "
    "team_b_score, played, streamed, _meta__is_current, _meta__is_deleted, "
    "_meta__last_modified) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 1, 0, ?)"
)


class DrawNotFoundError(LookupError):
    """Raised when no draw with the requested id is stored."""


def _now() -> int:
    return int(time.time())


def default_db_path() -> Path:
    """Path of the application database, creating its directory."""
    data_dir = Path(user_data_dir("data", "swissdraw"))
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "data.db"


def open_database(path: str | PathLike[str] | None = None) -> sqlite3.Connection:
    """Open (or create) the database and make sure its tables exist."""
    conn = sqlite3.connect(default_db_path() if path is None else path)
    init_db(conn)
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create the draw, teams and games tables if they do not exist."""
    with conn:
        for statement in _SCHEMA:
            conn.execute(statement)


def load_draw(conn: sqlite3.Connection, sd_id: int) -> SwissDraw:
    """Load a draw with its teams and its games that are not deleted."""
    row = conn.execute("SELECT id, name FROM draw WHERE id = ?", (sd_id,)).fetchone()
    if row is None:
        raise DrawNotFoundError(f"no draw with id {sd_id}")
    draw_id, name = row

    teams = [
        Team(team_name, float(rank), id=team_id)
        for team_id, team_name, rank in conn.execute(
            "SELECT id, name, rank FROM teams WHERE sd_id = ?", (sd_id,)
        )
    ]
    games = [
        Game(
            team_a=team_a,
            team_b=team_b,
            field=field_no,
            round=round_no,
            team_a_score=score_a,
            team_b_score=score_b,
            streamed=bool(streamed),
            played=bool(played),
            id=game_id,
        )
        for game_id, round_no, field_no, team_a, team_b, score_a, score_b, streamed, played
        in conn.execute(
            "SELECT id, round, field, team_a_id, team_b_id, team_a_score, team_b_score, "
            "streamed, played FROM games WHERE sd_id = ? AND _meta__is_deleted = 0",
            (sd_id,),
        )
    ]
    current_round = max((game.round for game in games), default=0)
    return SwissDraw(id=draw_id, name=name, round=max(current_round, 0), teams=teams, games=games)


def sync_draw(conn: sqlite3.Connection, draw: SwissDraw) -> None:
    """Store the draw, inserting it if new and updating it otherwise."""
    (exists,) = conn.execute(
        "SELECT EXISTS(SELECT 1 FROM draw WHERE id = ?)", (draw.id,)
    ).fetchone()
    if exists:
        update_draw(conn, draw)
    else:
        save_draw(conn, draw)


def _game_values(draw: SwissDraw, game: Game, now: int) -> tuple:
    return (
        draw.id,
        game.id,
        game.round,
        game.field,
        game.team_a,
        game.team_b,
        game.team_a_score,
        game.team_b_score,
        game.played,
        game.streamed,
        now,
    )


def save_draw(conn: sqlite3.Connection, draw: SwissDraw) -> None:
    """Insert a new draw with all of its teams and games."""
    now = _now()
    with conn:
        conn.execute(
            "INSERT INTO draw (id, name, last_modified) VALUES (?, ?, ?)",
            (draw.id, draw.name, now),
        )
        conn.executemany(
            _INSERT_TEAM, [(draw.id, team.id, team.name, team.rank) for team in draw.teams]
        )
        conn.executemany(_INSERT_GAME, [_game_values(draw, game, now) for game in draw.games])


def update_draw(conn: sqlite3.Connection, draw: SwissDraw) -> None:
    """Update a stored draw: upsert teams and games, mark vanished games deleted."""
    now = _now()
    with conn:
        conn.execute(
            "UPDATE draw SET name = ?, last_modified = ? WHERE id = ?",
            (draw.name, now, draw.id),
        )
        for team in draw.teams:
            cursor = conn.execute(
                "UPDATE teams SET name = ?, rank = ? WHERE sd_id = ? AND id = ?",
                (team.name, team.rank, draw.id, team.id),
            )
            if cursor.rowcount == 0:
                conn.execute(_INSERT_TEAM, (draw.id, team.id, team.name, team.rank))

        current_ids = set()
        for game in draw.games:
            current_ids.add(game.id)
            cursor = conn.execute(
                "UPDATE games SET round = ?, field = ?, team_a_id = ?, team_b_id = ?, "
                "team_a_score = ?, team_b_score = ?, played = ?, streamed = ?, "
                "_meta__is_current = 1, _meta__is_deleted = 0, _meta__last_modified = ? "
                "WHERE sd_id = ? AND id = ?",
                (
                    game.round,
                    game.field,
                    game.team_a,
                    game.team_b,
                    game.team_a_score,
                    game.team_b_score,
                    game.played,
                    game.streamed,
                    now,
                    draw.id,
                    game.id,
                ),
            )
            if cursor.rowcount == 0:
                conn.execute(_INSERT_GAME, _game_values(draw, game, now))

        stored_ids = {
            game_id
            for (game_id,) in conn.execute(
                "SELECT id FROM games WHERE sd_id = ? AND _meta__is_deleted = 0", (draw.id,)
            )
        }
        for game_id in stored_ids - current_ids:
            conn.execute(
                "UPDATE games SET _meta__is_deleted = 1, _meta__is_current = 0, "
                "_meta__last_modified = ? WHERE sd_id = ? AND id = ?",
                (now, draw.id, game_id),
            )