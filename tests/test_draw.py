import pytest

from swissdraw.draw import DrawNotReadyError, SwissDraw
from swissdraw.models import BYE_NAME, Game, Team
from swissdraw.ratings import SELF_COST


def _played(a, b, sa, sb, round_no=1):
    return Game(a, b, round=round_no, team_a_score=sa, team_b_score=sb, played=True)


def test_add_team_and_add_teams():
    draw = SwissDraw()
    team = draw.add_team("Alpha", 2.5)
    draw.add_teams([Team("Beta", 1.0), Team("Gamma", 0.5)])
    assert [t.name for t in draw.teams] == ["Alpha", "Beta", "Gamma"]
    assert draw.teams[0] is team
    assert team.rank == 2.5


def test_add_game_appends():
    draw = SwissDraw()
    game = Game("A", "B")
    draw.add_game(game)
    assert draw.games == [game]


def test_add_teams_from_games_unique_in_order():
    draw = SwissDraw()
    draw.add_game(_played("A", "B", 1, 0))
    draw.add_game(_played("C", "A", 1, 0))
    draw.add_teams_from_games(1.0)
    assert [t.name for t in draw.teams] == ["A", "C", "B"]
    assert all(t.rank == 1.0 for t in draw.teams)


def test_edit_game_scores_marks_played():
    draw = SwissDraw()
    game = Game("A", "B")
    other = Game("C", "D")
    draw.add_game(game)
    draw.add_game(other)
    draw.edit_game_scores(game.id, 7, 3)
    assert (game.team_a_score, game.team_b_score, game.played) == (7, 3, True)
    assert other.played is False


def test_compute_strengths_round_zero_sorts_by_rank():
    draw = SwissDraw()
    draw.add_teams([Team("Low", 1.0), Team("High", 9.0), Team("Mid", 5.0)])
    result = draw.compute_strengths()
    assert [t.name for t in result] == ["High", "Mid", "Low"]
    assert draw.latest_rank == result


def test_compute_strengths_after_games_uses_margins():
    draw = SwissDraw(round=1)
    draw.add_teams([Team("A", 1.0), Team("B", 1.0)])
    draw.add_game(_played("A", "B", 10, 6))
    result = draw.compute_strengths()
    names = [t.name for t in result]
    assert names[0] == "A"
    assert names[-1] == "B"
    assert BYE_NAME in names
    ranks = {t.name: t.rank for t in result}
    assert ranks["A"] - ranks["B"] == pytest.approx(4.0)


def test_cost_matrix_shape_and_diagonal():
    draw = SwissDraw()
    draw.add_teams([Team("A", 3.0), Team("B", 2.0), Team("C", 1.0), Team("D", 0.0)])
    costs = draw.cost_matrix()
    assert costs.shape == (4, 4)
    assert (costs.diagonal() >= SELF_COST).all()
    assert (costs == costs.T).all()


def test_check_draw_adds_bye_for_odd_count():
    draw = SwissDraw()
    draw.add_teams([Team("A", 3.0), Team("B", 2.0), Team("C", 1.0)])
    draw.check_draw()
    assert len(draw.teams) == 4
    assert draw.teams[-1].name == BYE_NAME
    assert draw.teams[-1].id == 0


def test_check_draw_rejects_unplayed_games():
    draw = SwissDraw()
    draw.add_teams([Team("A", 1.0), Team("B", 0.0)])
    draw.add_game(Game("A", "B"))
    with pytest.raises(DrawNotReadyError):
        draw.check_draw()


def test_run_draw_refuses_with_unplayed_games():
    draw = SwissDraw()
    draw.add_teams([Team("A", 1.0), Team("B", 0.0)])
    draw.add_game(Game("A", "B", round=1))
    with pytest.raises(DrawNotReadyError):
        draw.run_draw()
    assert draw.round == 0


def test_run_draw_pairs_close_ranks():
    draw = SwissDraw()
    draw.add_teams([Team("A", 4.0), Team("B", 3.0), Team("C", 2.0), Team("D", 1.0)])
    games = draw.run_draw()
    assert draw.round == 1
    assert {frozenset((g.team_a, g.team_b)) for g in games} == {
        frozenset(("A", "B")),
        frozenset(("C", "D")),
    }
    assert sorted(g.field for g in games) == [1, 2]
    assert all(g.round == 1 for g in games)
    assert draw.current_round_games() == games


def test_run_draw_with_bye_and_no_rematch():
    draw = SwissDraw()
    draw.add_teams([Team("A", 3.0), Team("B", 2.0), Team("C", 1.0)])
    first = draw.run_draw()
    byes = [g for g in first if g.is_bye()]
    assert len(first) == 2
    assert len(byes) == 1
    assert byes[0].played is True
    assert (byes[0].team_a_score, byes[0].team_b_score) == (0, 0)

    for game in first:
        if not game.is_bye():
            draw.edit_game_scores(game.id, 5, 3)
    second = draw.run_draw()
    assert draw.round == 2
    assert len(second) == 2
    earlier = {frozenset((g.team_a, g.team_b)) for g in first}
    later = {frozenset((g.team_a, g.team_b)) for g in second}
    assert earlier.isdisjoint(later)
    names = [n for g in second for n in (g.team_a, g.team_b)]
    assert sorted(names) == sorted(["A", "B", "C", BYE_NAME])


def test_load_games_csv(tmp_path):
    path = tmp_path / "games.csv"
    path.write_text(
        "round,teamA,teamB,teamAScore,teamBScore,field\n"
        "2,Red,Blue,11,9,F1\n"
        ",Green,Red,4,6,F2\n"
        "1,Blue,Green,oops,3,F3\n",
        encoding="utf-8",
    )
    draw = SwissDraw()
    draw.add_game(Game("X", "Y", played=True))
    count = draw.load_games_csv(path)
    assert count == 2
    loaded = draw.games[1:]
    assert [(g.team_a, g.team_b) for g in loaded] == [("Red", "Blue"), ("Green", "Red")]
    assert [g.round for g in loaded] == [2, 1]
    assert [g.id for g in loaded] == [2, 3]
    assert all(g.played and g.field == 1 for g in loaded)
    assert (loaded[0].team_a_score, loaded[0].team_b_score) == (11, 9)


def test_load_games_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SwissDraw().load_games_csv(tmp_path / "absent.csv")