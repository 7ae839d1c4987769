"""Data models for feo."""

from dataclasses import dataclass

# Per-core cumulative user + system ticks, index-aligned to core number.
CpuTimeSample = tuple[int, ...]


def format_memory(value_kib: float) -> str:
    """Format a memory amount given in KiB with a suitable binary unit."""
    if value_kib > 1_000_000:
        return f"{value_kib / 1_048_576:.2f}Gi"
    if value_kib > 1_000:
        return f"{value_kib / 1024:.2f}Mi"
    value_kib = float(value_kib)
    if value_kib.is_integer():
        return f"{int(value_kib)}Ki"
    return f"{value_kib!r}Ki"


@dataclass(slots=True, frozen=True)
class MemoryReading:
    """RAM and swap amounts in KiB, as read from the kernel."""

    ram_kib: float
    swap_kib: float


@dataclass(slots=True, frozen=True)
class MemoryTotal:
    """Total RAM and swap with their display strings computed once."""

    ram_kib: float
    swap_kib: float
    ram_with_unit: str
    swap_with_unit: str

    @classmethod
    def from_reading(cls, reading: MemoryReading) -> "MemoryTotal":
        """Build a MemoryTotal, formatting both amounts up front."""
        return cls(
            ram_kib=reading.ram_kib,
            swap_kib=reading.swap_kib,
            ram_with_unit=format_memory(reading.ram_kib),
            swap_with_unit=format_memory(reading.swap_kib),
        )


@dataclass(slots=True, frozen=True)
class TemperatureReading:
    """CPU temperature and, when monitored, GPU temperature in Celsius."""

    cpu_temp_c: float
    gpu_temp_c: float | None = None


@dataclass(slots=True, frozen=True)
class SystemSnapshot:
    """Immutable point-in-time reading of every monitored metric."""

    cpu_temp: float
    gpu_temp: float | None
    cpu_times: CpuTimeSample
    mem_free: MemoryReading
    uptime: float  # Seconds since boot
