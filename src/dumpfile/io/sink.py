from __future__ import annotations

import threading
from pathlib import Path
from typing import List, TextIO


class OutputSink:
    def write_line(self, text: str) -> None:  # noqa: D401
        """Receive one finished output line, without its line break."""
        raise NotImplementedError


class StreamSink(OutputSink):
    def __init__(self, stream: TextIO, flush: bool = False):
        self.stream = stream
        self.flush = flush

    def write_line(self, text: str) -> None:
        try:
            self.stream.write(text)
        except UnicodeEncodeError:
            # 8-bit text the stream cannot encode degrades to "?"
            enc = getattr(self.stream, "encoding", None) or "ascii"
            self.stream.write(text.encode(enc, errors="replace").decode(enc))
        self.stream.write("\n")
        if self.flush:
            self.stream.flush()


class ListSink(OutputSink):
    """Keeps every line in order; safe to read while a worker is writing."""

    def __init__(self) -> None:
        self._lines: List[str] = []
        self._lock = threading.Lock()

    def write_line(self, text: str) -> None:
        with self._lock:
            self._lines.append(text)

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def text(self) -> str:
        return "".join(f"{ln}\n" for ln in self.lines)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def save(self, path: Path) -> int:
        data = self.text()
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
        return len(data)


class TeeSink(OutputSink):
    def __init__(self, *sinks: OutputSink):
        self.sinks = sinks

    def write_line(self, text: str) -> None:
        for s in self.sinks:
            s.write_line(text)
