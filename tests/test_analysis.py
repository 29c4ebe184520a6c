import pytest

from crunch.analysis import analyze, analyze_table
from crunch.errors import (
    ColumnNotFound,
    DegenerateInputError,
    EmptyInputError,
    ParseError,
    RaggedRowWarning,
)
from crunch.parsing import parse

GAPPY_CSV = "x,y,label\n1,2,a\n2,,b\n,100,c\n3,6,d\n4,8,e\n"


def test_regression_uses_only_rows_with_both_values():
    report = analyze("x", "y", GAPPY_CSV)

    # Positional pairing would have matched x=2 with y=100.
    assert report.regression.n == 3
    assert report.regression.points == ((1.0, 2.0), (3.0, 6.0), (4.0, 8.0))
    assert report.regression.slope == 2.0
    assert report.regression.intercept == 0.0
    assert report.regression.r_squared == 1.0
    assert report.rows_used == 3
    assert report.rows_dropped == 2


def test_column_statistics_cover_each_full_column():
    report = analyze("x", "y", GAPPY_CSV)
    assert report.x_stats.count == 4
    assert report.x_stats.mean == 2.5
    assert report.y_stats.count == 4
    assert report.y_stats.max == 100.0


def test_one_gap_per_column_leaves_a_single_pair():
    csv_text = "x,y\n1,10\n,20\n3,\n"
    # Only the first row has both values; one point cannot define a line.
    with pytest.raises(DegenerateInputError):
        analyze("x", "y", csv_text)


def test_no_shared_rows_is_empty_input():
    with pytest.raises(EmptyInputError):
        analyze("x", "y", "x,y\n1,\n,2\n")


def test_missing_column_propagates():
    with pytest.raises(ColumnNotFound, match="'z'"):
        analyze("x", "z", GAPPY_CSV)


def test_text_column_has_no_numeric_values():
    with pytest.raises(EmptyInputError):
        analyze("x", "label", GAPPY_CSV)


def test_empty_text_is_a_parse_error():
    with pytest.raises(ParseError):
        analyze("x", "y", "")


def test_stats_can_be_skipped():
    report = analyze("x", "y", GAPPY_CSV, include_stats=False)
    assert report.x_stats is None
    assert report.y_stats is None
    assert report.to_dict()["x_stats"] is None
    assert report.to_frame().empty


def test_parser_options_are_forwarded():
    csv_text = "x;y\n1;3\n2;5\n3\n3;7\n"
    with pytest.warns(RaggedRowWarning):
        report = analyze("x", "y", csv_text, delimiter=";", on_mismatch="skip")
    assert report.skipped_rows == 1
    assert report.regression.n == 3
    assert report.regression.slope == 2.0
    assert report.regression.intercept == 1.0


def test_analyze_table_reuses_a_parsed_table():
    table = parse(GAPPY_CSV)
    first = analyze_table(table, "x", "y")
    second = analyze_table(table, "y", "x", ddof=1)
    assert first.regression.n == second.regression.n == 3
    assert second.x_column == "y"
    assert second.x_stats.ddof == 1


def test_report_frame_has_one_row_per_column():
    frame = analyze("x", "y", GAPPY_CSV).to_frame()
    assert list(frame.index) == ["x", "y"]
    assert frame.loc["x", "count"] == 4
    assert frame.loc["x", "mean"] == 2.5


def test_timestamp_column_regression():
    csv_text = (
        "t,v\n"
        "1700000000,0\n"
        "1700000001,3\n"
        "1700000002,6\n"
        "1700000003,9\n"
    )
    report = analyze("t", "v", csv_text)
    assert report.regression.slope == 3.0
    assert report.regression.r_squared == 1.0
    assert report.regression.predict(1700000004) == 12.0
