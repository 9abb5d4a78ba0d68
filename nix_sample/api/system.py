import os
import platform
import resource
import sys
import time

from pydantic import BaseModel

# Close enough to process start for an uptime counter
STARTED_AT = time.monotonic()


class MemoryUsage(BaseModel):
    rss: str
    max_rss: str


class SystemInfo(BaseModel):
    python_version: str
    platform: str
    arch: str
    uptime: float
    memory: MemoryUsage
    environment: str


def environment() -> str:
    return os.environ.get("ENVIRONMENT", "development")


def megabytes(n_bytes: int) -> str:
    return f"{round(n_bytes / 1024 / 1024)}MB"


def current_rss() -> int:
    """Resident set size of this process in bytes

    Reads /proc when available, otherwise falls back to the peak value.
    """
    try:
        with open("/proc/self/statm") as f:
            pages = int(f.read().split()[1])
    except OSError:
        return peak_rss()
    return pages * resource.getpagesize()


def peak_rss() -> int:
    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports kilobytes
    if sys.platform == "darwin":
        return max_rss
    return max_rss * 1024


def system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=sys.platform,
        arch=platform.machine(),
        uptime=time.monotonic() - STARTED_AT,
        memory=MemoryUsage(rss=megabytes(current_rss()), max_rss=megabytes(peak_rss())),
        environment=environment(),
    )
