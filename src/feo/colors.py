"""Color themes for the monitor."""

from dataclasses import dataclass
from enum import Enum

Rgb = tuple[int, int, int]

WHITE: Rgb = (255, 255, 255)
BLACK: Rgb = (0, 0, 0)


class Theme(Enum):
    """Color themes selectable from the command line."""

    WHITE = "w"
    BLACK = "b"
    STANDARD = "s"

    @classmethod
    def decode(cls, value: str | None) -> "Theme":
        """
        Decode a theme selector.

        Anything other than 'w' or 'b' (including an empty or unknown
        value) selects the standard theme.
        """
        if value == cls.WHITE.value:
            return cls.WHITE
        if value == cls.BLACK.value:
            return cls.BLACK
        return cls.STANDARD


@dataclass(slots=True, frozen=True)
class Colors:
    """Foreground colors for each section of the monitor."""

    temp: Rgb
    cpu: Rgb
    mem: Rgb
    uptime: Rgb

    @classmethod
    def for_theme(cls, theme: Theme) -> "Colors":
        """Return the color set for a theme."""
        if theme is Theme.WHITE:
            return cls(temp=WHITE, cpu=WHITE, mem=WHITE, uptime=WHITE)
        if theme is Theme.BLACK:
            return cls(temp=BLACK, cpu=BLACK, mem=BLACK, uptime=BLACK)
        return cls(
            temp=(255, 255, 0),
            cpu=(0, 220, 0),
            mem=(255, 0, 255),
            uptime=(0, 230, 230),
        )
