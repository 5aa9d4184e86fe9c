"""
Tests for splitting file content into typed chunks.
"""

from presenter.playback.chunker import remove_lines_containing, split_text_into_chunks


class TestRemoveLinesContaining:
    """Tests for skipped-line filtering."""

    def test_removes_whole_line_with_newline(self):
        """Test that a matching line disappears together with its newline."""
        text = "keep\n# region hidden\nalso keep\n"
        assert remove_lines_containing(text, ["# region"]) == "keep\nalso keep\n"

    def test_last_line_without_newline(self):
        """Test removing a final line that has no trailing newline."""
        assert remove_lines_containing("a\nb # hide", ["# hide"]) == "a\n"

    def test_no_needles_returns_text(self):
        """Test that empty or missing needles leave the text unchanged."""
        assert remove_lines_containing("a\nb\n", []) == "a\nb\n"
        assert remove_lines_containing("a\nb\n", [""]) == "a\nb\n"


class TestSplitTextIntoChunks:
    """Tests for the chunk splitter."""

    def test_no_rules_single_chunk(self):
        """Test that empty rule sets return the whole text as one chunk."""
        assert split_text_into_chunks("def f():\n    pass\n") == ["def f():\n    pass\n"]

    def test_empty_text(self):
        """Test that empty input gives no chunks."""
        assert split_text_into_chunks("", ["|"], ["\n"], ["x"]) == []

    def test_instead_marker_is_dropped(self):
        """Test that a pause-instead marker ends the chunk and is not typed."""
        assert split_text_into_chunks("abc|def", ["|"]) == ["abc", "def"]

    def test_after_marker_is_kept(self):
        """Test that a pause-after marker stays at the end of its chunk."""
        assert split_text_into_chunks("a = 1;b = 2", [], [";"]) == ["a = 1;", "b = 2"]

    def test_no_empty_chunks(self):
        """Test that adjacent and leading markers do not produce empty chunks."""
        assert split_text_into_chunks("|a||b|", ["|"]) == ["a", "b"]

    def test_newline_marker(self):
        """Test splitting after every newline."""
        assert split_text_into_chunks("one\ntwo\nthree", [], ["\n"]) == ["one\n", "two\n", "three"]

    def test_skip_lines_before_splitting(self):
        """Test that skipped lines never reach any chunk."""
        text = "import os\n# hidden\nprint(os.name)\n"
        chunks = split_text_into_chunks(text, [], ["\n"], ["# hidden"])
        assert chunks == ["import os\n", "print(os.name)\n"]

    def test_instead_wins_over_after_at_same_offset(self):
        """Test that pause-instead markers are checked before pause-after markers."""
        chunks = split_text_into_chunks("x//!y", ["//"], ["//!"])
        assert chunks == ["x", "!y"]

    def test_longest_marker_wins_within_set(self):
        """Test that the longest matching marker of a set is used."""
        assert split_text_into_chunks("a//b", [], ["/", "//"]) == ["a//", "b"]

    def test_empty_markers_ignored(self):
        """Test that empty marker strings do not split anything."""
        assert split_text_into_chunks("abc", [""], [""]) == ["abc"]

    def test_rejoin_restores_text(self):
        """Test that chunks rejoined with consumed markers give back the text."""
        text = "class A:\n    x = 1|\n    y = 2\n|print(A)"
        chunks = split_text_into_chunks(text, ["|"], ["\n"])
        assert "".join(chunks) == text.replace("|", "")

        only_instead = split_text_into_chunks("a|b|c", ["|"])
        assert "|".join(only_instead) == "a|b|c"
