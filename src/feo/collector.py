"""System metrics collector for feo.

Reads the kernel's text sources under ``/proc`` and ``/sys`` plus the
``nproc`` and ``vcgencmd`` commands, and turns their output into typed
readings. Every failure is raised as a :class:`~feo.errors.FeoError`
subclass; nothing here exits the process.
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from feo.errors import EncodingError, ParseError, SourceUnavailable
from feo.models import CpuTimeSample, MemoryReading, SystemSnapshot, TemperatureReading

logger = logging.getLogger(__name__)

TOTAL_KEYS = ("MemTotal", "SwapTotal")
FREE_KEYS = ("MemAvailable", "SwapFree")

_MEMINFO_SEPARATORS = re.compile(r"[: \n]")
_GPU_TEMP_SEPARATORS = re.compile(r"[=']")


@dataclass(slots=True, frozen=True)
class Sources:
    """Locations of the text sources and commands the collector reads."""

    meminfo: Path = Path("/proc/meminfo")
    stat: Path = Path("/proc/stat")
    cpu_temp: Path = Path("/sys/class/thermal/thermal_zone0/temp")
    uptime: Path = Path("/proc/uptime")
    nproc_command: tuple[str, ...] = ("nproc",)
    gpu_temp_command: tuple[str, ...] = ("vcgencmd", "measure_temp")


def _to_float(token: str, what: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ParseError(f"{what}: expected a number, got {token!r}") from None


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ParseError(f"{what}: expected an integer, got {token!r}") from None


def parse_memory(content: str, ram_key: str, swap_key: str) -> MemoryReading:
    """
    Parse RAM and swap amounts (KiB) out of ``/proc/meminfo`` content.

    The content is tokenized on colons, spaces and newlines; the token right
    after each key is its value.
    """
    tokens = [token for token in _MEMINFO_SEPARATORS.split(content) if token]

    def value_of(key: str) -> float:
        try:
            index = tokens.index(key)
        except ValueError:
            raise ParseError(f"Couldn't find position of {key}") from None
        if index + 1 >= len(tokens):
            raise ParseError(f"No value follows {key}")
        return _to_float(tokens[index + 1], key)

    return MemoryReading(ram_kib=value_of(ram_key), swap_kib=value_of(swap_key))


def parse_cpu_times(content: str, num_cpus: int) -> CpuTimeSample:
    """
    Parse per-core user + system ticks out of ``/proc/stat`` content.

    The result is ordered by core number, independent of line order.
    """
    tokens = content.split()
    cpu_times = []
    for i in range(num_cpus):
        label = f"cpu{i}"
        try:
            index = tokens.index(label)
        except ValueError:
            raise ParseError(f"Couldn't find position of {label}") from None
        fields = tokens[index + 1 : index + 4]
        if len(fields) < 3:
            raise ParseError(f"{label}: expected at least 3 tick counters")
        user = _to_int(fields[0], f"{label} user time")
        system = _to_int(fields[2], f"{label} system time")
        cpu_times.append(user + system)
    return tuple(cpu_times)


def parse_cpu_temp(content: str) -> float:
    """Parse a millidegree Celsius reading into degrees."""
    return _to_float(content.strip(), "CPU temperature") / 1000


def parse_gpu_temp(output: str) -> float:
    """Parse ``vcgencmd measure_temp`` output such as ``temp=48.3'C``."""
    parts = _GPU_TEMP_SEPARATORS.split(output)
    if len(parts) < 2:
        raise ParseError(f"Unexpected GPU temperature output: {output!r}")
    return _to_float(parts[1], "GPU temperature")


def parse_uptime(content: str) -> float:
    """Parse the seconds since boot from ``/proc/uptime`` content."""
    fields = content.split()
    if not fields:
        raise ParseError("Uptime source is empty")
    return _to_float(fields[0], "uptime")


def parse_num_cpus(output: str) -> int:
    """Parse the logical CPU count printed by ``nproc``."""
    num_cpus = _to_int(output.strip(), "number of CPUs")
    if num_cpus < 1:
        raise ParseError(f"number of CPUs must be positive, got {num_cpus}")
    return num_cpus


class SystemCollector:
    """
    Reads system metrics from a set of sources.

    Each ``read_*`` method performs one fresh read of its source. No value
    is cached between calls.
    """

    def __init__(self, sources: Sources | None = None) -> None:
        """
        Initialize the SystemCollector.

        Args:
            sources: Where to read from. Defaults to the live Linux sources.
        """
        self._sources = sources or Sources()

    @property
    def sources(self) -> Sources:
        """Get the sources this collector reads."""
        return self._sources

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text()
        except OSError as e:
            raise SourceUnavailable(f"Could not read {path}: {e}") from e

    def _run(self, command: tuple[str, ...]) -> str:
        try:
            result = subprocess.run(list(command), capture_output=True, check=False)
        except OSError as e:
            raise SourceUnavailable(f"Failed to execute {' '.join(command)}: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise SourceUnavailable(
                f"{' '.join(command)} exited with status {result.returncode}: {stderr}"
            )
        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"Output of {' '.join(command)} is not valid UTF-8") from e

    def read_memory(self, ram_key: str, swap_key: str) -> MemoryReading:
        """Read the RAM and swap values stored under the given keys."""
        return parse_memory(self._read_text(self._sources.meminfo), ram_key, swap_key)

    def read_memory_total(self) -> MemoryReading:
        """Read total RAM and total swap."""
        return self.read_memory(*TOTAL_KEYS)

    def read_memory_free(self) -> MemoryReading:
        """Read available RAM and free swap."""
        return self.read_memory(*FREE_KEYS)

    def read_cpu_times(self, num_cpus: int) -> CpuTimeSample:
        """Read cumulative user + system ticks for cores ``0..num_cpus-1``."""
        return parse_cpu_times(self._read_text(self._sources.stat), num_cpus)

    def read_num_cpus(self) -> int:
        """Ask ``nproc`` for the number of logical CPUs."""
        return parse_num_cpus(self._run(self._sources.nproc_command))

    def read_cpu_temp(self) -> float:
        """Read the CPU temperature in degrees Celsius."""
        return parse_cpu_temp(self._read_text(self._sources.cpu_temp))

    def read_gpu_temp(self) -> float:
        """Read the GPU temperature in degrees Celsius (Raspberry Pi only)."""
        return parse_gpu_temp(self._run(self._sources.gpu_temp_command))

    def read_temperatures(self, gpu: bool) -> TemperatureReading:
        """Read the CPU temperature, and the GPU temperature when requested."""
        return TemperatureReading(
            cpu_temp_c=self.read_cpu_temp(),
            gpu_temp_c=self.read_gpu_temp() if gpu else None,
        )

    def read_uptime(self) -> float:
        """Read the seconds elapsed since boot."""
        return parse_uptime(self._read_text(self._sources.uptime))

    def take_snapshot(self, gpu: bool, num_cpus: int) -> SystemSnapshot:
        """
        Collect one reading from every source.

        The reads are sequential and not atomic with respect to each other.

        Args:
            gpu: Whether to include the GPU temperature.
            num_cpus: Core count detected at startup, so the CPU-time sample
                lines up with the previous one.
        """
        temperatures = self.read_temperatures(gpu)
        cpu_times = self.read_cpu_times(num_cpus)
        mem_free = self.read_memory_free()
        uptime = self.read_uptime()
        return SystemSnapshot(
            cpu_temp=temperatures.cpu_temp_c,
            gpu_temp=temperatures.gpu_temp_c,
            cpu_times=cpu_times,
            mem_free=mem_free,
            uptime=uptime,
        )

    def check_compatibility(self, gpu: bool) -> None:
        """
        Verify every source is reachable before monitoring starts.

        Raises:
            SourceUnavailable: If a file can't be read or a command can't run.
        """
        self._run(self._sources.nproc_command)
        for path in (
            self._sources.cpu_temp,
            self._sources.stat,
            self._sources.meminfo,
            self._sources.uptime,
        ):
            self._read_text(path)
        if gpu:
            self._run(self._sources.gpu_temp_command)
        logger.debug("All sources reachable (gpu=%s)", gpu)
