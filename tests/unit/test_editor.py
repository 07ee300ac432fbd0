import pytest

from dynamic_tokens.components import Threshold
from dynamic_tokens.editor import (
    ThresholdRow,
    add_row,
    parse_threshold,
    remove_row,
    rows_for_token,
    save_thresholds,
    set_row_image,
    thresholds_from_rows,
    update_row,
)
from dynamic_tokens.utils.thresholds import get_thresholds
from tests.test_utils import make_threshold_token


def test_rows_for_token_follow_stored_order() -> None:
    rows = rows_for_token(make_threshold_token())
    assert [row.img for row in rows] == ["a.png", "b.png", "c.png"]
    assert rows_for_token(make_threshold_token(thresholds=None)) == ()


def test_add_row_defaults_to_full_health() -> None:
    rows = add_row(())
    assert rows == (ThresholdRow(threshold=100.0, img=""),)


def test_remove_and_update_rows() -> None:
    rows = rows_for_token(make_threshold_token())
    rows = remove_row(rows, 1)
    assert [row.img for row in rows] == ["a.png", "c.png"]
    rows = update_row(rows, 0, threshold="10")
    assert rows[0] == ThresholdRow(threshold="10", img="a.png")
    rows = set_row_image(rows, 1, "picked.png")
    assert rows[1].img == "picked.png"


@pytest.mark.parametrize("index", [-1, 3])
def test_bad_row_index_raises(index: int) -> None:
    rows = rows_for_token(make_threshold_token())
    with pytest.raises(ValueError):
        remove_row(rows, index)
    with pytest.raises(ValueError):
        set_row_image(rows, index, "x.png")


@pytest.mark.parametrize(
    "raw, expected",
    [("", 100.0), ("  ", 100.0), (None, 100.0), ("42", 42.0), (7, 7.0), ("12.5", 12.5)],
)
def test_parse_threshold(raw: object, expected: float) -> None:
    assert parse_threshold(raw) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize("raw", ["abc", "nan", "inf"])
def test_parse_threshold_rejects_non_numeric(raw: str) -> None:
    assert parse_threshold(raw) is None


def test_thresholds_from_rows_cleans_form_input() -> None:
    rows = (
        ThresholdRow(threshold="30", img="  low.png "),
        ThresholdRow(threshold="", img="full.png"),
        ThresholdRow(threshold="50", img="   "),
        ThresholdRow(threshold="lots", img="bad.png"),
    )
    assert thresholds_from_rows(rows) == (
        Threshold(threshold=30.0, img="low.png"),
        Threshold(threshold=100.0, img="full.png"),
    )


def test_save_thresholds_round_trips_through_flags() -> None:
    token = make_threshold_token(thresholds=None)
    rows = add_row(())
    rows = set_row_image(rows, 0, "hurt.png")
    rows = update_row(rows, 0, threshold="50")
    saved = save_thresholds(token, rows)
    assert get_thresholds(saved) == (Threshold(threshold=50.0, img="hurt.png"),)
    assert get_thresholds(token) == ()
