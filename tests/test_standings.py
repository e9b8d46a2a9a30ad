import itertools

import pytest

from league_legend.standings import (
    FormatError,
    MatchRecord,
    RankingEntry,
    StandingsCalculator,
    apply_match,
    build_ranking,
    compute_standings,
    format_match_line,
    parse_match_line,
    standings_frame,
    validate_ranking,
)


def _triples(entries):
    return [(e.rank, e.team, e.points) for e in entries]


def test_parse_match_line_basic():
    record = parse_match_line("Liverpool 3, ManchesterUnited 1")
    assert record == MatchRecord("Liverpool", 3, "ManchesterUnited", 1)


def test_parse_match_line_multi_word_teams_and_extra_spaces():
    record = parse_match_line("  Manchester   United 0 ,Real Madrid  12 ")
    assert record.home_team == "Manchester United"
    assert record.home_score == 0
    assert record.away_team == "Real Madrid"
    assert record.away_score == 12


def test_parse_match_line_keeps_case_distinct_names():
    record = parse_match_line("foo 1, Foo 1")
    assert record.home_team == "foo"
    assert record.away_team == "Foo"


@pytest.mark.parametrize(
    "line",
    [
        "Foo vs Bar",
        "Foo 1, Bar 2, Baz 3",
        "Foo two, Bar 1",
        "Foo 1, Bar -1",
        "Foo 1, Bar 1.5",
        "3, Bar 1",
        "Foo 1, ",
        "",
    ],
)
def test_parse_match_line_rejects_malformed(line):
    with pytest.raises(FormatError):
        parse_match_line(line)


def test_format_error_carries_reason_and_line():
    with pytest.raises(FormatError) as info:
        parse_match_line("Foo two, Bar 1")
    assert info.value.line == "Foo two, Bar 1"
    assert "'two'" in info.value.reason
    assert isinstance(info.value, ValueError)


def test_format_then_parse_returns_record():
    records = [
        MatchRecord("Liverpool", 3, "ManchesterUnited", 1),
        MatchRecord("Real Madrid", 0, "FC Bayern Munich", 0),
        MatchRecord("a", 10, "B", 0),
    ]
    for record in records:
        assert parse_match_line(format_match_line(record)) == record


def test_format_then_parse_collapses_inner_whitespace_in_names():
    record = MatchRecord("Real  Madrid", 1, "FC\tPorto", 0)
    parsed = parse_match_line(format_match_line(record))
    assert parsed == MatchRecord("Real Madrid", 1, "FC Porto", 0)
    assert parse_match_line(format_match_line(parsed)) == parsed


def test_apply_match_awards_points():
    table = {}
    apply_match(MatchRecord("A", 2, "B", 1), table)
    assert table == {"A": 3, "B": 0}
    apply_match(MatchRecord("A", 0, "B", 4), table)
    assert table == {"A": 3, "B": 3}
    apply_match(MatchRecord("B", 1, "C", 1), table)
    assert table == {"A": 3, "B": 4, "C": 1}


def test_points_per_match_sum_to_three_or_two():
    for home, away in itertools.product(range(4), repeat=2):
        table = {}
        apply_match(MatchRecord("H", home, "A", away), table)
        total = sum(table.values())
        assert total == (2 if home == away else 3)


def test_build_ranking_competition_ranks():
    ranking = build_ranking({"A": 10, "B": 10, "C": 8, "D": 8, "E": 1})
    assert [e.rank for e in ranking] == [1, 1, 3, 3, 5]


def test_build_ranking_case_insensitive_tie_break():
    ranking = build_ranking({"chelsea": 4, "Arsenal": 4, "burnley": 4})
    assert [e.team for e in ranking] == ["Arsenal", "burnley", "chelsea"]


def test_build_ranking_empty_table():
    assert build_ranking({}) == []


def test_scenario_decisive_match():
    assert _triples(compute_standings(["Liverpool 3, ManchesterUnited 1"])) == [
        (1, "Liverpool", 3),
        (2, "ManchesterUnited", 0),
    ]


def test_scenario_draw():
    assert _triples(compute_standings(["Arsenal 2, Chelsea 2"])) == [
        (1, "Arsenal", 1),
        (1, "Chelsea", 1),
    ]


def test_scenario_level_on_points_after_two_matches():
    assert _triples(compute_standings(["Foo 1, Bar 0", "Bar 3, Foo 0"])) == [
        (1, "Bar", 3),
        (1, "Foo", 3),
    ]


def test_scenario_malformed_lines_abort():
    with pytest.raises(FormatError):
        compute_standings(["Foo 1, Bar 0", "Foo vs Bar"])
    with pytest.raises(FormatError):
        compute_standings(["Foo two, Bar 1"])


def test_ranking_independent_of_input_order():
    lines = [
        "Lions 3, Snakes 3",
        "Tarantulas 1, FC Awesome 0",
        "Lions 1, FC Awesome 1",
        "Tarantulas 3, Snakes 1",
        "Lions 4, Grouches 0",
        "grouches 2, snakes 2",
    ]
    expected = compute_standings(lines)
    for permutation in itertools.permutations(lines):
        assert compute_standings(permutation) == expected


def test_reranking_is_idempotent():
    ranking = compute_standings(["A 1, B 0", "C 2, D 2", "B 1, C 0", "D 0, A 0"])
    table = {e.team: e.points for e in ranking}
    assert build_ranking(table) == ranking


def test_calculator_tags_line_number_on_error():
    calculator = StandingsCalculator()
    with pytest.raises(FormatError) as info:
        calculator.add_lines(["A 1, B 0", "A 1 B 0"])
    assert info.value.line_number == 2
    assert "line 2" in str(info.value)
    assert calculator.matches_processed == 1


def test_calculator_points_table_is_a_copy():
    calculator = StandingsCalculator()
    calculator.add_line("A 1, B 0")
    table = calculator.points_table
    table["A"] = 99
    assert calculator.points_table == {"A": 3, "B": 0}


def test_standings_frame_columns():
    df = standings_frame(compute_standings(["A 1, B 1"]))
    assert list(df.columns) == ["rank", "team", "points"]
    assert df["rank"].tolist() == [1, 1]


def test_validate_ranking_accepts_computed_table():
    validate_ranking(compute_standings(["A 1, B 0", "C 2, D 2", "E 0, F 5"]))


def test_validate_ranking_reports_bad_tie_rank():
    entries = [RankingEntry(1, "A", 3), RankingEntry(2, "B", 3)]
    with pytest.raises(ValueError, match="tied teams"):
        validate_ranking(entries)


def test_validate_ranking_reports_dense_rank():
    entries = [RankingEntry(1, "A", 3), RankingEntry(1, "B", 3), RankingEntry(2, "C", 0)]
    with pytest.raises(ValueError, match="expected 3"):
        validate_ranking(entries)
