"""Child-process resource usage, in the spirit of ``/usr/bin/time``."""

from __future__ import annotations

import os
import resource
import subprocess
import sys
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceUsage:
    elapsed_s: float
    user_s: float
    sys_s: float
    max_rss_kb: int
    in_blocks: int
    out_blocks: int

    def render(self) -> str:
        return (
            f"elapsed={format_elapsed(self.elapsed_s)}, user={self.user_s:.2f}, sys={self.sys_s:.2f}, "
            f"mem={self.max_rss_kb}, in={self.in_blocks}, out={self.out_blocks}"
        )

    @classmethod
    def from_rusage(cls, elapsed_s: float, ru: resource.struct_rusage) -> ResourceUsage:
        # ru_maxrss is bytes on macOS, kilobytes elsewhere.
        max_rss = ru.ru_maxrss // 1024 if sys.platform == "darwin" else ru.ru_maxrss
        return cls(
            elapsed_s=elapsed_s,
            user_s=ru.ru_utime,
            sys_s=ru.ru_stime,
            max_rss_kb=int(max_rss),
            in_blocks=ru.ru_inblock,
            out_blocks=ru.ru_oublock,
        )


def format_elapsed(seconds: float) -> str:
    """Format like GNU time's %E: ``[hours:]minutes:seconds``."""
    hours, rem = divmod(max(seconds, 0.0), 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{int(hours)}:{int(minutes):02d}:{secs:05.2f}"
    return f"{int(minutes)}:{secs:05.2f}"


def wait_measured(proc: subprocess.Popen[bytes], started: float) -> tuple[int, ResourceUsage]:
    """Reap ``proc`` and return its exit code with the usage of that child alone.

    The rusage comes from ``wait4`` on the child's pid, so it covers the child
    and the descendants it waited for, never earlier commands.
    """
    _, status, ru = os.wait4(proc.pid, 0)
    elapsed = time.monotonic() - started
    proc.returncode = os.waitstatus_to_exitcode(status)
    return proc.returncode, ResourceUsage.from_rusage(elapsed, ru)


__all__ = ["ResourceUsage", "format_elapsed", "wait_measured"]
