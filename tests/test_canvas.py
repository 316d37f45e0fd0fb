"""Tests for renderers.charset and renderers.canvas: junction merging and drawing primitives."""

from syntax_diagrams.renderers.canvas import Canvas, Rect
from syntax_diagrams.renderers.charset import Arms, BoxChars, CharSet


class TestArmsFromChar:
    def test_from_char_horizontal(self):
        a = Arms.from_char("─")
        assert a is not None
        assert not a.up and not a.down and a.left and a.right

    def test_from_char_unknown_returns_none(self):
        assert Arms.from_char("X") is None
        assert Arms.from_char(" ") is None
        assert Arms.from_char("╭") is None

    def test_from_char_plus(self):
        a = Arms.from_char("+")
        assert a is not None
        assert a.up and a.down and a.left and a.right


class TestArmsMerge:
    def test_merge_cross(self):
        horiz = Arms.from_char("─")
        vert = Arms.from_char("│")
        assert horiz is not None and vert is not None
        assert horiz.merge(vert).to_char(CharSet.Unicode) == "┼"

    def test_box_border_entry(self):
        # Track entering a box's left border from the left
        border = Arms.from_char("│")
        assert border is not None
        assert border.merge(Arms(left=True)).to_char(CharSet.Unicode) == "┤"

    def test_rail_corners(self):
        assert Arms(down=True, left=True).to_char(CharSet.Unicode) == "┐"
        assert Arms(up=True, right=True).to_char(CharSet.Unicode) == "└"

    def test_ascii_junctions_are_plus(self):
        assert Arms(up=True, down=True, right=True).to_char(CharSet.Ascii) == "+"
        assert Arms(left=True, right=True).to_char(CharSet.Ascii) == "-"
        assert Arms(up=True, down=True).to_char(CharSet.Ascii) == "|"

    def test_single_arm(self):
        assert Arms(down=True).to_char(CharSet.Unicode) == "│"
        assert Arms(right=True).to_char(CharSet.Unicode) == "─"
        assert Arms().to_char(CharSet.Unicode) == " "


class TestBoxChars:
    def test_rounded_unicode(self):
        bc = BoxChars.rounded(CharSet.Unicode)
        assert (bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right) == ("╭", "╮", "╰", "╯")
        assert bc.horizontal == "─"

    def test_rounded_ascii(self):
        bc = BoxChars.rounded(CharSet.Ascii)
        assert (bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right) == ("/", "\\", "\\", "/")

    def test_arrows(self):
        assert BoxChars.for_charset(CharSet.Unicode).arrow_left == "◄"
        assert BoxChars.for_charset(CharSet.Ascii).arrow_left == "<"
        assert not hasattr(BoxChars.unicode(), "arrow_right")


class TestCanvas:
    def test_set_get(self):
        canvas = Canvas(10, 5, CharSet.Unicode)
        canvas.set(3, 2, "X")
        assert canvas.get(3, 2) == "X"
        assert canvas.get(0, 0) == " "

    def test_out_of_bounds_ignored(self):
        canvas = Canvas(5, 5, CharSet.Unicode)
        canvas.set(10, 10, "X")
        canvas.join(-1, 0, Arms(left=True))
        assert canvas.get(10, 10) == " "

    def test_join_merges(self):
        canvas = Canvas(10, 10, CharSet.Unicode)
        canvas.set(5, 5, "─")
        canvas.join(5, 5, Arms(up=True, down=True))
        assert canvas.get(5, 5) == "┼"

    def test_hline(self):
        canvas = Canvas(20, 5, CharSet.Unicode)
        canvas.hline(2, 7, 3)
        for col in range(3, 8):
            assert canvas.get(col, 2) == "─", f"col={col}"
        assert canvas.get(2, 2) == " "
        assert canvas.get(8, 2) == " "

    def test_vline_leaves_end_cells_to_caller(self):
        canvas = Canvas(10, 10, CharSet.Unicode)
        canvas.vline(4, 2, 6)
        assert canvas.get(4, 2) == " "
        assert canvas.get(4, 4) == "│"
        assert canvas.get(4, 6) == " "

    def test_rail_ends_joined_with_full_arms(self):
        canvas = Canvas(10, 10, CharSet.Unicode)
        canvas.hline(2, 0, 4)
        canvas.hline(6, 0, 3)
        canvas.vline(4, 2, 6)
        canvas.join(4, 2, Arms(down=True, left=True))
        canvas.join(4, 6, Arms(up=True, left=True))
        assert canvas.get(4, 2) == "┬"
        assert canvas.get(4, 5) == "│"
        assert canvas.get(4, 6) == "┘"

    def test_vline_crossing_hline(self):
        canvas = Canvas(20, 20, CharSet.Unicode)
        canvas.hline(5, 2, 10)
        canvas.vline(6, 2, 10)
        assert canvas.get(6, 5) == "┼"
        assert canvas.get(6, 3) == "│"

    def test_draw_box(self):
        canvas = Canvas(20, 10, CharSet.Unicode)
        canvas.draw_box(Rect(2, 1, 6, 3), BoxChars.unicode())
        assert canvas.get(2, 1) == "┌"
        assert canvas.get(7, 1) == "┐"
        assert canvas.get(2, 3) == "└"
        assert canvas.get(7, 3) == "┘"
        for col in range(3, 7):
            assert canvas.get(col, 1) == "─", f"top col={col}"
        assert canvas.get(2, 2) == "│"
        assert canvas.get(7, 2) == "│"

    def test_write_str(self):
        canvas = Canvas(20, 5, CharSet.Unicode)
        canvas.write_str(3, 2, "hello")
        assert canvas.get(3, 2) == "h"
        assert canvas.get(7, 2) == "o"

    def test_to_string_trims(self):
        canvas = Canvas(10, 3, CharSet.Unicode)
        canvas.set(0, 0, "A")
        assert canvas.to_string() == "A\n"

    def test_rect_right_bottom(self):
        r = Rect(3, 4, 10, 5)
        assert r.right() == 13
        assert r.bottom() == 9
