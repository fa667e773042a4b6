"""Append-only text sink for the history file."""

from datetime import datetime, timezone
from pathlib import Path

HEADER_RULE = "====================================== "


def reset_sink(path: Path, repo_id: str, now: datetime | None = None) -> None:
    """Truncate the output file and write the dated header."""
    now = now or datetime.now(timezone.utc)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", errors="backslashreplace") as f:
        f.write(f"{HEADER_RULE}\n{repo_id} GIT History - {now.isoformat()}\n{HEADER_RULE}\n")


class HistorySink:
    """Ordered, line-oriented append target.

    Each call writes and flushes before returning, so the file order is the
    call order. Text that cannot be encoded as UTF-8 (lone surrogates from a
    truncated emoji) is written as a backslash escape.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding="utf-8", errors="backslashreplace")
        self.lines = 0

    def append(self, line: str) -> None:
        if "\n" in line or "\r" in line:
            raise ValueError(f"Record spans multiple lines: {line[:60]!r}")
        self._file.write(line + "\n")
        self._file.flush()
        self.lines += 1

    def append_block(self, text: str) -> None:
        """Write a multi-line block verbatim."""
        if not text:
            return
        if not text.endswith("\n"):
            text += "\n"
        self._file.write(text)
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
