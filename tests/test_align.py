"""Tests for aligned info lines."""

from huginn.align import LEFT_MARGIN, SEPARATOR, format_info_lines, max_label_width, separator_column
from huginn.colors import strip_ansi


class TestFormatInfoLines:
    """Tests for label alignment."""

    def test_separators_share_one_column(self) -> None:
        """Labels of different lengths still put the separator in one column."""
        entries = [("distro", "Arch"), ("wm", "Sway"), ("packages", "1024"), ("nix", "42")]
        lines = format_info_lines(entries)
        columns = {separator_column(line) for line in lines}
        assert columns == {LEFT_MARGIN + 1 + len("packages") + 1}

    def test_labels_right_justified(self) -> None:
        """Short labels are padded on the left."""
        lines = [strip_ansi(line) for line in format_info_lines([("wm", "Sway"), ("kernel", "6.8")])]
        assert lines[0] == " " * LEFT_MARGIN + "     wm " + SEPARATOR + " Sway"
        assert lines[1] == " " * LEFT_MARGIN + " kernel " + SEPARATOR + " 6.8"

    def test_order_is_preserved(self) -> None:
        """Lines come out in insertion order, not sorted."""
        lines = format_info_lines([("zeta", "1"), ("alpha", "2")])
        assert "zeta" in lines[0]
        assert "alpha" in lines[1]

    def test_empty_entries(self) -> None:
        """No entries, no lines."""
        assert format_info_lines([]) == []
        assert max_label_width([]) == 0

    def test_same_input_gives_identical_output(self) -> None:
        """Formatting is deterministic."""
        entries = [("distro", "Arch"), ("shell", "zsh")]
        assert format_info_lines(list(entries)) == format_info_lines(list(entries))

    def test_separator_column_without_separator(self) -> None:
        """Lines without a separator report None."""
        assert separator_column("plain text") is None
