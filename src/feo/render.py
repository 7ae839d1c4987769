"""Dashboard rendering for feo."""

from collections.abc import Sequence

from rich.color import Color
from rich.console import Console
from rich.style import Style
from rich.text import Text

from feo.colors import Colors, Rgb
from feo.models import MemoryTotal, SystemSnapshot, format_memory

LINE_WIDTH = 30
SEPARATOR = "-" * LINE_WIDTH
BAR_WIDTH = 20


def format_uptime(uptime_seconds: float) -> str:
    """Format seconds as HH:MM:SS, hours unbounded, fractions truncated."""
    total = int(uptime_seconds)
    hours = total // 3600
    minutes = total // 60 % 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def load_bar(load_percent: int) -> str:
    """Return one '|' per 5 percentage points, rounded half up, uncapped."""
    return "|" * max(0, (load_percent + 2) // 5)


def _label(text: str, rgb: Rgb) -> Text:
    label = Text()
    label.append(text, style=Style(color=Color.from_rgb(*rgb)))
    return label


class Renderer:
    """Formats snapshots into colored lines and writes them to a console."""

    def __init__(self, colors: Colors, console: Console | None = None) -> None:
        """
        Initialize the Renderer.

        Args:
            colors: Foreground colors for the section labels.
            console: Rich console to draw on. Defaults to stdout.
        """
        self._colors = colors
        self._console = console or Console(highlight=False)

    @property
    def colors(self) -> Colors:
        """Get the active color set."""
        return self._colors

    def render_lines(
        self,
        snapshot: SystemSnapshot,
        mem_total: MemoryTotal,
        loads: Sequence[int],
    ) -> list[Text]:
        """Build the dashboard lines for one tick, without drawing them."""
        colors = self._colors
        lines = [Text(SEPARATOR)]

        lines.append(self._temp_line(snapshot.cpu_temp, "CPU"))
        if snapshot.gpu_temp is not None:
            lines.append(self._temp_line(snapshot.gpu_temp, "GPU"))

        for i, load in enumerate(loads):
            line = _label(f"CPU{i + 1}", colors.cpu)
            line.append(f"[{load_bar(load):<{BAR_WIDTH}}]{load:>3}%")
            lines.append(line)

        ram_used = format_memory(mem_total.ram_kib - snapshot.mem_free.ram_kib)
        swap_used = format_memory(mem_total.swap_kib - snapshot.mem_free.swap_kib)
        ram_line = _label("RAM", colors.mem)
        ram_line.append(f":{ram_used + '/' + mem_total.ram_with_unit:>26}")
        swap_line = _label("Swap", colors.mem)
        swap_line.append(f":{swap_used + '/' + mem_total.swap_with_unit:>25}")
        lines.extend([ram_line, swap_line])

        uptime_line = _label("Uptime", colors.uptime)
        uptime_line.append(f":{format_uptime(snapshot.uptime):>23}")
        lines.append(uptime_line)

        lines.append(Text(SEPARATOR))
        return lines

    def _temp_line(self, temp: float, component: str) -> Text:
        line = _label(f"{component} temp", self._colors.temp)
        line.append(f":{temp:>18.1f}° C")
        return line

    def draw(
        self,
        snapshot: SystemSnapshot,
        mem_total: MemoryTotal,
        loads: Sequence[int],
    ) -> None:
        """Clear the screen and write the dashboard for one tick."""
        lines = self.render_lines(snapshot, mem_total, loads)
        self._console.clear()
        for line in lines:
            self._console.print(line, highlight=False, soft_wrap=True)
