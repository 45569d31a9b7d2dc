"""Tests for the ripgrep dual-notation output parser."""

from w2vgrep_mcp.models import MatchLocation
from w2vgrep_mcp.parsing import parse_location_output


class TestSingleBlock:
    """One ripgrep block with match and context lines."""

    def test_match_with_context(self):
        output = (
            "/path/file.ts-10-line before\n"
            "/path/file.ts:11:matched line\n"
            "/path/file.ts-12-line after"
        )

        result = parse_location_output(output, "/path")

        assert result == [
            MatchLocation(
                file="file.ts",
                line=11,
                context="line before\nmatched line\nline after",
            )
        ]

    def test_context_sorted_by_line_number(self):
        output = (
            "/path/file.md-12-twelve\n"
            "/path/file.md:11:eleven\n"
            "/path/file.md-10-ten"
        )

        location = parse_location_output(output, "/path")[0]

        assert location.context == "ten\neleven\ntwelve"

    def test_match_line_without_context(self):
        location = parse_location_output("/path/a.md:3:only", "/path")[0]

        assert location.line == 3
        assert location.context == "only"

    def test_empty_content_is_kept(self):
        output = "/p/a.md-1-\n/p/a.md:2:hit\n/p/a.md-3-"

        assert parse_location_output(output, "/p")[0].context == "\nhit\n"

    def test_colons_in_content(self):
        location = parse_location_output("/p/a.md:5:key: value: more", "/p")[0]

        assert location.line == 5
        assert location.context == "key: value: more"

    def test_path_outside_base_is_kept_absolute(self):
        location = parse_location_output("/other/a.md:1:x", "/path")[0]

        assert location.file == "/other/a.md"

    def test_relative_base(self):
        location = parse_location_output("docs/guide.md:4:x", "docs")[0]

        assert location.file == "guide.md"


class TestMultipleBlocks:
    """Block splitting and dropping."""

    def test_blocks_in_input_order(self, rg_output):
        result = parse_location_output(rg_output, "/notes")

        assert [(loc.file, loc.line) for loc in result] == [("a.md", 10), ("sub/b.md", 3)]
        assert result[0].context == "before\n# Russian text\nafter"

    def test_context_only_block_is_dropped(self):
        output = "/p/a.md-1-ctx\n/p/a.md-2-ctx\n--\n/p/b.md:7:hit"

        result = parse_location_output(output, "/p")

        assert len(result) == 1
        assert result[0].file == "b.md"

    def test_unrecognized_lines_are_skipped(self):
        output = "garbage line\n/p/a.md:2:hit\nmore garbage"

        result = parse_location_output(output, "/p")

        assert result[0].context == "hit"

    def test_surrounding_whitespace_is_trimmed(self):
        output = "\n\n/p/a.md:2:hit\n--\n/p/b.md:3:hit\n\n"

        assert len(parse_location_output(output, "/p")) == 2


class TestEdgeCases:
    """Empty input never raises."""

    def test_empty_input(self):
        assert parse_location_output("", "/p") == []

    def test_whitespace_only_input(self):
        assert parse_location_output("  \n \n", "/p") == []

    def test_only_separators(self):
        assert parse_location_output("--\n--", "/p") == []
