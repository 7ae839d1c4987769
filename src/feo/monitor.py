"""Sampling loop for feo."""

import logging
import threading
from collections.abc import Sequence
from enum import Enum

from feo.collector import SystemCollector
from feo.models import CpuTimeSample, MemoryTotal, SystemSnapshot
from feo.render import Renderer

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 2


class LoopState(Enum):
    """States of the sampling loop."""

    PRIMING = "priming"
    RUNNING = "running"


def effective_delay(delay: int) -> int:
    """Return the sampling delay in seconds, treating 0 as 2."""
    return DEFAULT_DELAY if delay == 0 else delay


def compute_cpu_load(
    previous: Sequence[int],
    current: Sequence[int],
    delay: int,
) -> list[int]:
    """
    Derive per-core load percentages from two CPU-time samples.

    Ticks are centiseconds, so busy ticks per second over the interval is a
    percentage. The result is not clamped and can exceed 100. A core whose
    counter went backwards reports 0.
    """
    delay = effective_delay(delay)
    loads = []
    for core, (before, after) in enumerate(zip(previous, current)):
        busy = after - before
        if busy < 0:
            logger.warning(
                "CPU%d tick counter decreased (%d -> %d), reporting 0%%",
                core + 1,
                before,
                after,
            )
            busy = 0
        loads.append(busy // delay)
    return loads


class SampleLoop:
    """
    Periodically samples the system and renders the dashboard.

    Starts in PRIMING, where the core count, memory totals and the first
    CPU-time sample are read, then stays in RUNNING until stopped or
    interrupted. Reader errors propagate out of :meth:`run` unhandled.
    """

    def __init__(
        self,
        renderer: Renderer,
        collector: SystemCollector | None = None,
        delay: int = DEFAULT_DELAY,
        gpu: bool = False,
    ) -> None:
        """
        Initialize the SampleLoop.

        Args:
            renderer: Renderer that draws each tick.
            collector: Source of readings. Defaults to the live system.
            delay: Seconds between ticks. 0 means 2.
            gpu: Whether to monitor the GPU temperature.
        """
        self._renderer = renderer
        self._collector = collector or SystemCollector()
        self._delay = effective_delay(delay)
        self._gpu = gpu
        self._state = LoopState.PRIMING
        self._stop_event = threading.Event()
        self._num_cpus = 0
        self._mem_total: MemoryTotal | None = None
        self._memory_warned = False

    @property
    def delay(self) -> int:
        """Get the effective delay between ticks, in seconds."""
        return self._delay

    @property
    def state(self) -> LoopState:
        """Get the current loop state."""
        return self._state

    @property
    def num_cpus(self) -> int:
        """Get the core count detected while priming (0 before priming)."""
        return self._num_cpus

    @property
    def mem_total(self) -> MemoryTotal | None:
        """Get the memory totals read while priming."""
        return self._mem_total

    def prime(self) -> CpuTimeSample:
        """Read the startup values and return the first CPU-time sample."""
        self._num_cpus = self._collector.read_num_cpus()
        self._mem_total = MemoryTotal.from_reading(self._collector.read_memory_total())
        initial = self._collector.read_cpu_times(self._num_cpus)
        self._state = LoopState.RUNNING
        logger.info(
            "Monitoring %d CPUs every %ds (gpu=%s), RAM total %s, swap total %s",
            self._num_cpus,
            self._delay,
            self._gpu,
            self._mem_total.ram_with_unit,
            self._mem_total.swap_with_unit,
        )
        return initial

    def tick(self, previous: CpuTimeSample) -> SystemSnapshot:
        """
        Sample, derive loads and render once.

        Args:
            previous: CPU-time sample from the prior tick (or from priming).

        Returns:
            The new snapshot; its ``cpu_times`` is the next tick's ``previous``.
        """
        if self._state is not LoopState.RUNNING or self._mem_total is None:
            raise RuntimeError("SampleLoop.tick() called before prime()")

        snapshot = self._collector.take_snapshot(self._gpu, self._num_cpus)
        loads = compute_cpu_load(previous, snapshot.cpu_times, self._delay)
        if not self._memory_warned and (
            snapshot.mem_free.ram_kib > self._mem_total.ram_kib
            or snapshot.mem_free.swap_kib > self._mem_total.swap_kib
        ):
            self._memory_warned = True
            logger.warning(
                "Free memory exceeds total (free=%s, total=%s)",
                snapshot.mem_free,
                self._mem_total,
            )
        logger.debug("Loads %s, uptime %.2fs", loads, snapshot.uptime)
        self._renderer.draw(snapshot, self._mem_total, loads)
        return snapshot

    def run(self) -> None:
        """Prime, then tick every ``delay`` seconds until stopped."""
        self._stop_event.clear()
        previous = self.prime()
        while not self._stop_event.is_set():
            previous = self.tick(previous).cpu_times
            # Wait for delay seconds or until stop is requested
            self._stop_event.wait(timeout=self._delay)

    def stop(self) -> None:
        """Request the loop to end at the next suspension point."""
        self._stop_event.set()
