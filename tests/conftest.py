"""Shared fixtures for feo tests."""

import sys
from pathlib import Path

import pytest

from feo.collector import Sources, SystemCollector

MEMINFO = """\
MemTotal:        3890000 kB
MemFree:          512000 kB
MemAvailable:    2621440 kB
Buffers:           65536 kB
Cached:          1048576 kB
SwapCached:            0 kB
SwapTotal:        102396 kB
SwapFree:         102396 kB
"""

STAT = """\
cpu  1000 20 300 40000 50 0 6 0 0 0
cpu0 500 10 150 20000 25 0 3 0 0 0
cpu1 400 10 120 20000 25 0 3 0 0 0
intr 123456 0 0 0
ctxt 654321
btime 1700000000
"""


def python_command(code: str) -> tuple[str, ...]:
    """Build a command that runs a snippet with the current interpreter."""
    return (sys.executable, "-c", code)


def make_sources(
    directory: Path,
    meminfo: str = MEMINFO,
    stat: str = STAT,
    cpu_temp: str = "47300\n",
    uptime: str = "3661.52 7000.10\n",
    num_cpus: int = 2,
    gpu_output: str = "temp=46.7'C",
) -> Sources:
    """Write fixture sources into a directory and return their locations."""
    files = {
        "meminfo": meminfo,
        "stat": stat,
        "temp": cpu_temp,
        "uptime": uptime,
    }
    for name, content in files.items():
        (directory / name).write_text(content)
    return Sources(
        meminfo=directory / "meminfo",
        stat=directory / "stat",
        cpu_temp=directory / "temp",
        uptime=directory / "uptime",
        nproc_command=python_command(f"print({num_cpus})"),
        gpu_temp_command=python_command(f"print({gpu_output!r})"),
    )


@pytest.fixture
def sources(tmp_path: Path) -> Sources:
    """Fixture sources describing a two-core host."""
    return make_sources(tmp_path)


@pytest.fixture
def collector(sources: Sources) -> SystemCollector:
    """A collector reading the fixture sources."""
    return SystemCollector(sources)
