"""Command-line front end for running Swiss draws."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from contextlib import closing

from .draw import DrawNotReadyError, SwissDraw
from .models import BYE_NAME, Game, Team
from .storage import DrawNotFoundError, load_draw, open_database, sync_draw


def format_rankings(teams: Iterable[Team]) -> str:
    """Render teams and their scores as aligned lines, leaving out the bye."""
    return "\n".join(
        f"{team.name:20} | {team.rank:.3f}" for team in teams if team.name != BYE_NAME
    )


def parse_team(text: str) -> Team:
    """Parse ``NAME=RANK`` (or just ``NAME``, rank 0) into a new team."""
    name, sep, rank_text = text.rpartition("=")
    if not sep:
        name, rank_text = text, "0"
    name = name.strip()
    if not name:
        raise ValueError(f"team name missing in {text!r}")
    try:
        rank = float(rank_text)
    except ValueError:
        raise ValueError(f"invalid rank {rank_text!r} for team {name!r}") from None
    return Team(name, rank)


def _parse_result(text: str) -> tuple[int, int, int]:
    """Parse ``GAME_ID=A:B`` into the game id and the two scores."""
    id_text, sep, scores = text.partition("=")
    a_text, colon, b_text = scores.partition(":")
    if not sep or not colon:
        raise ValueError(f"result {text!r} must look like GAME_ID=A:B")
    try:
        return int(id_text), int(a_text), int(b_text)
    except ValueError:
        raise ValueError(f"result {text!r} must hold whole numbers") from None


def _team_arg(text: str) -> Team:
    try:
        return parse_team(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _format_game(game: Game) -> str:
    return (
        f"field {game.field:>2}: {game.team_a} vs {game.team_b} "
        f"- {game.team_a_score} : {game.team_b_score} [game {game.id}]"
    )


def _print_round(draw: SwissDraw) -> None:
    print(f"Round {draw.round}")
    for game in draw.current_round_games():
        print(_format_game(game))


def _cmd_score(args: argparse.Namespace) -> int:
    draw = SwissDraw(round=1)
    draw.load_games_csv(args.csv)
    draw.add_teams_from_games(1.0)
    strengths = draw.compute_strengths()
    output = format_rankings(strengths)
    if output:
        print(output)
    return 0


def _cmd_new(args: argparse.Namespace) -> int:
    name = args.name.strip()
    if not name:
        raise ValueError("the draw needs a name")
    if len(args.teams) < 2:
        raise ValueError("at least 2 teams are required")
    draw = SwissDraw(name=name, round=1)
    draw.add_teams(args.teams)
    with closing(open_database(args.db)) as conn:
        sync_draw(conn, draw)
    print(draw.id)
    return 0


def _cmd_pair(args: argparse.Namespace) -> int:
    with closing(open_database(args.db)) as conn:
        draw = load_draw(conn, args.sd_id)
        draw.run_draw()
        sync_draw(conn, draw)
    _print_round(draw)
    return 0


def _cmd_scores(args: argparse.Namespace) -> int:
    results = [_parse_result(text) for text in args.results]
    with closing(open_database(args.db)) as conn:
        draw = load_draw(conn, args.sd_id)
        if results:
            current = {game.id for game in draw.current_round_games()}
            for game_id, score_a, score_b in results:
                if game_id not in current:
                    raise ValueError(f"game {game_id} is not in round {draw.round}")
                draw.edit_game_scores(game_id, score_a, score_b)
            sync_draw(conn, draw)
    _print_round(draw)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swissdraw", description="Run Swiss draw tournaments.")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="rank teams from a CSV of game results")
    score.add_argument("csv", help="CSV with teamA,teamB,teamAScore,teamBScore,field")
    score.set_defaults(handler=_cmd_score)

    def with_db(p: argparse.ArgumentParser) -> argparse.ArgumentParser:
        p.add_argument("--db", default=None, help="database file (default: user data dir)")
        return p

    new = with_db(sub.add_parser("new", help="create a draw from teams given as NAME=RANK"))
    new.add_argument("name", help="name of the draw")
    new.add_argument("teams", nargs="+", type=_team_arg, metavar="NAME=RANK")
    new.set_defaults(handler=_cmd_new)

    pair = with_db(sub.add_parser("pair", help="pair the teams for the next round"))
    pair.add_argument("sd_id", type=int, help="draw id")
    pair.set_defaults(handler=_cmd_pair)

    scores = with_db(sub.add_parser("scores", help="show or enter scores of the current round"))
    scores.add_argument("sd_id", type=int, help="draw id")
    scores.add_argument("results", nargs="*", metavar="GAME_ID=A:B")
    scores.set_defaults(handler=_cmd_scores)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (DrawNotFoundError, DrawNotReadyError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())