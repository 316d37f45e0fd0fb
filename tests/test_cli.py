"""Tests for the syntax-diagrams CLI."""

from click.testing import CliRunner

from syntax_diagrams.__main__ import main


def _run(*args: str):
    return CliRunner().invoke(main, list(args))


class TestSections:
    def test_lists_all_sections(self):
        result = _run("sections")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 21
        assert lines[0].startswith("starting")
        assert "Starting Rules (4)" in lines[0]

    def test_filter_counts(self):
        result = _run("sections", "--filter", "import")
        assert result.exit_code == 0
        assert "Starting Rules (0)" in result.output


class TestRules:
    def test_section_rules(self):
        result = _run("rules", "--section", "starting")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["file", "interactive", "eval", "func_type"]

    def test_filter(self):
        result = _run("rules", "--filter", "DOTTED")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["dotted_as_names", "dotted_as_name", "dotted_name"]

    def test_all_rules(self):
        result = _run("rules")
        assert result.exit_code == 0
        assert len(result.output.splitlines()) == 204

    def test_unknown_section(self):
        result = _run("rules", "--section", "nope")
        assert result.exit_code == 1
        assert "error: unknown section 'nope'" in result.output


class TestShow:
    def test_show_rule(self):
        result = _run("show", "pass_stmt")
        assert result.exit_code == 0
        assert result.output == "pass_stmt:\n  ╭──────╮\n├─┤ pass ├─┤\n  ╰──────╯\n"

    def test_show_ascii_no_title(self):
        result = _run("show", "--ascii", "--no-title", "pass_stmt")
        assert result.exit_code == 0
        assert result.output == "  /------\\\n+-+ pass +-+\n  \\------/\n"

    def test_show_several(self):
        result = _run("show", "pass_stmt", "break_stmt")
        assert result.exit_code == 0
        assert "pass_stmt:" in result.output
        assert "break_stmt:" in result.output

    def test_show_unknown_is_placeholder(self):
        result = _run("show", "nope")
        assert result.exit_code == 0
        assert "no definition for nope" in result.output

    def test_show_output_file(self, tmp_path):
        out = tmp_path / "pass.txt"
        result = _run("show", "pass_stmt", "--output", str(out))
        assert result.exit_code == 0
        assert result.output == ""
        assert "├─┤ pass ├─┤" in out.read_text(encoding="utf-8")

    def test_show_output_unwritable(self, tmp_path):
        result = _run("show", "pass_stmt", "--output", str(tmp_path / "missing" / "out.txt"))
        assert result.exit_code == 1
        assert "error: cannot write" in result.output

    def test_show_needs_name(self):
        result = _run("show")
        assert result.exit_code != 0


class TestSvg:
    def test_named_rules(self, tmp_path):
        result = _run("svg", "pass_stmt", "block", "--output-dir", str(tmp_path))
        assert result.exit_code == 0
        assert sorted(p.name for p in tmp_path.iterdir()) == ["block.svg", "pass_stmt.svg"]
        assert "<svg" in (tmp_path / "block.svg").read_text(encoding="utf-8")
        assert "wrote 2 diagram(s)" in result.output

    def test_all_rules(self, tmp_path):
        out = tmp_path / "svg"
        result = _run("svg", "--all", "--output-dir", str(out))
        assert result.exit_code == 0
        assert len(list(out.glob("*.svg"))) == 204

    def test_unknown_rule_rejected(self, tmp_path):
        out = tmp_path / "svg"
        result = _run("svg", "pass_stmt", "../escaped", "--output-dir", str(out))
        assert result.exit_code == 1
        assert "error: unknown rule(s): ../escaped" in result.output
        assert not (tmp_path / "escaped.svg").exists()
        assert not out.exists()

    def test_nothing_selected(self, tmp_path):
        result = _run("svg", "--output-dir", str(tmp_path))
        assert result.exit_code == 1
        assert "error: give rule names or --all" in result.output


def test_check_ok():
    result = _run("check")
    assert result.exit_code == 0
    assert result.output == "ok\n"


def test_verbose_flag():
    result = _run("--verbose", "rules", "--section", "starting")
    assert result.exit_code == 0
    assert "file" in result.output
