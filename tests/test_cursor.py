"""Tests for cursor movement, clamping, paging and scrolling."""

from pound.cursor import CursorController, Direction
from pound.document import Document


def make(rows, columns=20, screen_rows=5):
    return Document(rows=rows), CursorController(screen_columns=columns, screen_rows=screen_rows)


def test_right_at_end_of_row_wraps_to_next_row():
    document, cursor = make(["abc", "de"])
    cursor.cursor_x = 3
    cursor.move_cursor(Direction.RIGHT, document)
    assert (cursor.cursor_y, cursor.cursor_x) == (1, 0)


def test_left_at_start_of_row_wraps_to_end_of_previous():
    document, cursor = make(["abc", "de"])
    cursor.cursor_y = 1
    cursor.move_cursor(Direction.LEFT, document)
    assert (cursor.cursor_y, cursor.cursor_x) == (0, 3)


def test_left_at_origin_is_noop():
    document, cursor = make(["abc"])
    cursor.move_cursor(Direction.LEFT, document)
    assert (cursor.cursor_y, cursor.cursor_x) == (0, 0)


def test_vertical_moves_clamp_to_row_length():
    document, cursor = make(["a long row", "ab", "another long row"])
    cursor.cursor_x = 8
    cursor.move_cursor(Direction.DOWN, document)
    assert (cursor.cursor_y, cursor.cursor_x) == (1, 2)
    cursor.move_cursor(Direction.DOWN, document)
    # The column is not remembered across the short row
    assert (cursor.cursor_y, cursor.cursor_x) == (2, 2)
    cursor.move_cursor(Direction.UP, document)
    cursor.move_cursor(Direction.UP, document)
    cursor.move_cursor(Direction.UP, document)
    assert cursor.cursor_y == 0


def test_down_stops_on_line_after_last_row():
    document, cursor = make(["one", "two"])
    for _ in range(5):
        cursor.move_cursor(Direction.DOWN, document)
    assert cursor.cursor_y == 2
    assert cursor.cursor_x == 0
    cursor.move_cursor(Direction.RIGHT, document)
    assert (cursor.cursor_y, cursor.cursor_x) == (2, 0)


def test_home_and_end():
    document, cursor = make(["hello"])
    cursor.move_cursor(Direction.END, document)
    assert cursor.cursor_x == 5
    cursor.move_cursor(Direction.HOME, document)
    assert cursor.cursor_x == 0


def test_page_down_and_up_respect_row_clamp():
    rows = ["row %d" % i for i in range(30)]
    rows[9] = ""
    document, cursor = make(rows, screen_rows=5)
    cursor.cursor_x = 5

    cursor.page_down(document)
    # Jump to the bottom of the window, then one window further down
    assert cursor.cursor_y == 4 + 5
    assert cursor.cursor_x == 0

    cursor.scroll(document)
    assert cursor.row_offset == 5
    cursor.page_up(document)
    assert cursor.cursor_y == 0


def test_page_down_near_end_stops_after_last_row():
    document, cursor = make(["a", "b", "c"], screen_rows=10)
    cursor.page_down(document)
    assert cursor.cursor_y == 3


def test_scroll_keeps_cursor_inside_window():
    document, cursor = make(["x" * 50 for _ in range(20)], columns=10, screen_rows=5)
    cursor.cursor_y = 12
    cursor.cursor_x = 30
    cursor.scroll(document)
    assert cursor.row_offset <= cursor.cursor_y < cursor.row_offset + cursor.screen_rows
    assert cursor.column_offset <= cursor.render_x < cursor.column_offset + cursor.screen_columns
    # Minimal adjustment puts the cursor on the last visible row/column
    assert cursor.row_offset == 8
    assert cursor.column_offset == 21

    cursor.cursor_y = 3
    cursor.cursor_x = 2
    cursor.scroll(document)
    assert cursor.row_offset == 3
    assert cursor.column_offset == 2


def test_scroll_uses_tab_expanded_column():
    document, cursor = make(["\t\tx"], columns=80)
    cursor.cursor_x = 2
    cursor.scroll(document)
    assert cursor.render_x == 16
