"""Block cursor range computation."""

from __future__ import annotations

from mintburn_watch.models.records import BlockRange
from mintburn_watch.pipeline.cursor import BlockCursor


def test_first_head_is_single_block():
    """No prior state: head B processes exactly {B}, never [0, B]."""
    cursor = BlockCursor()
    assert cursor.next_range(5_000_000) == BlockRange(5_000_000, 5_000_000)


def test_next_range_starts_after_last_processed():
    cursor = BlockCursor()
    cursor.advance(100)
    assert cursor.next_range(105) == BlockRange(101, 105)
    assert len(cursor.next_range(105)) == 5


def test_stale_head_yields_no_range():
    cursor = BlockCursor()
    cursor.advance(100)
    assert cursor.next_range(100) is None
    assert cursor.next_range(90) is None


def test_cursor_never_moves_backward():
    cursor = BlockCursor()
    cursor.advance(100)
    cursor.advance(50)
    assert cursor.last_processed == 100
