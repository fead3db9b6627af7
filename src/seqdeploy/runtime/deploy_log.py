from __future__ import annotations

from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def local_now() -> datetime:
    """Return the current local time with its timezone attached."""
    return datetime.now().astimezone()


def format_log_line(message: str, when: datetime) -> str:
    """Render one deploy-log line as `[YYYY-MM-DD HH:MM:SS TZ] message`."""
    return f"[{when.strftime(TIMESTAMP_FORMAT)}] {message}"


class DeployLog:
    """Append-only timestamped record of deploy lifecycle events."""

    def __init__(self, path: Path, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.path = path
        self.clock = clock or local_now

    def append(self, message: str) -> str:
        """Append one line and return it. The file is never truncated."""
        line = format_log_line(message, self.clock())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
        return line


def tail_lines(path: Path, count: int) -> List[str]:
    """Return the last `count` lines of a text file, or [] when it does not exist."""
    if count <= 0 or not path.exists():
        return []

    with path.open("r", encoding="utf-8", errors="replace") as handle:
        return [line.rstrip("\n") for line in deque(handle, maxlen=count)]
