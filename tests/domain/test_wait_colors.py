# tests/domain/test_wait_colors.py
import pytest

from dispatch_replay.policy.wait_colors import (
    DEFAULT_TABLE,
    WaitColorTable,
    wait_bucket,
    wait_to_color,
)


@pytest.mark.parametrize(
    "wait, bucket",
    [(0, 1), (14.9, 1), (15, 2), (29.99, 2), (30, 3), (45, 4), (59.9, 4), (60, 5), (600, 5)],
)
def test_buckets_are_right_exclusive(wait, bucket):
    assert wait_bucket(wait) == bucket


@pytest.mark.parametrize("wait", [-5.0, None, "late", float("nan")])
def test_negative_or_missing_wait_clamps_to_first_bucket(wait):
    assert wait_bucket(wait) == 1
    assert wait_to_color(wait) == (255, 255, 255)


def test_colors_run_from_white_to_deep_red():
    assert [wait_to_color(w) for w in (0, 20, 40, 50, 90)] == [
        (255, 255, 255),
        (255, 230, 230),
        (255, 190, 190),
        (255, 140, 140),
        (200, 0, 0),
    ]


def test_custom_table():
    table = WaitColorTable.from_rows([(5, (0, 0, 0)), (float("inf"), (9, 9, 9))])
    assert table.bucket(4.99) == 1
    assert table.color(5) == (9, 9, 9)
    assert DEFAULT_TABLE.bucket(5) == 1


def test_table_rejects_unordered_bounds():
    with pytest.raises(ValueError):
        WaitColorTable.from_rows([(30, (0, 0, 0)), (15, (1, 1, 1))])
    with pytest.raises(ValueError):
        WaitColorTable(())
