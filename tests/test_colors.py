"""Tests for feo color themes."""

import pytest

from feo.colors import Colors, Theme


class TestTheme:
    """Tests for Theme decoding."""

    def test_theme_values(self):
        """Test Theme enum has the selector characters as values."""
        assert Theme.WHITE.value == "w"
        assert Theme.BLACK.value == "b"
        assert Theme.STANDARD.value == "s"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("w", Theme.WHITE),
            ("b", Theme.BLACK),
            ("s", Theme.STANDARD),
            ("x", Theme.STANDARD),
            ("", Theme.STANDARD),
            ("white", Theme.STANDARD),
            (None, Theme.STANDARD),
        ],
    )
    def test_decode_with_default(self, value, expected):
        """Test anything but 'w' or 'b' decodes to the standard theme."""
        assert Theme.decode(value) is expected


class TestColors:
    """Tests for Colors."""

    def test_white_theme(self):
        """Test the white theme uses white for every section."""
        colors = Colors.for_theme(Theme.decode("w"))

        assert colors.temp == (255, 255, 255)
        assert colors.cpu == (255, 255, 255)
        assert colors.mem == (255, 255, 255)
        assert colors.uptime == (255, 255, 255)

    def test_black_theme(self):
        """Test the black theme uses black for every section."""
        colors = Colors.for_theme(Theme.decode("b"))

        assert colors.temp == (0, 0, 0)
        assert colors.cpu == (0, 0, 0)
        assert colors.mem == (0, 0, 0)
        assert colors.uptime == (0, 0, 0)

    def test_standard_theme(self):
        """Test the standard theme colors."""
        colors = Colors.for_theme(Theme.STANDARD)

        assert colors.temp == (255, 255, 0)
        assert colors.cpu == (0, 220, 0)
        assert colors.mem == (255, 0, 255)
        assert colors.uptime == (0, 230, 230)

    def test_no_match_returns_standard(self):
        """Test an unknown selector yields the same colors as 's'."""
        assert Colors.for_theme(Theme.decode("x")) == Colors.for_theme(Theme.decode("s"))
