from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterable, List

from dumpfile.core.config import DumpConfig
from dumpfile.core.line import DumpLine
from dumpfile.io.sink import OutputSink
from dumpfile.utils.hexfmt import format_count
from dumpfile.utils.logger import get_logger

log = get_logger(__name__)

ELLIPSIS = "   ..."
CANCELLED_NOTICE = "Cancelled by user."


class DumpStatus(Enum):
    FINISHED = "finished"
    NOT_A_FILE = "not a file"
    READ_FAILED = "read failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DumpResult:
    name: str
    status: DumpStatus
    byte_count: int = 0


@dataclass
class RunState:
    """Per-file working state: the pending line, the line being filled, and counters."""

    current: DumpLine
    previous: DumpLine
    line_used: int = 0
    same_count: int = 0
    file_offset: int = 0

    @classmethod
    def start(cls, config: DumpConfig) -> RunState:
        current = DumpLine(config)
        current.reset(0)
        previous = DumpLine(config)
        previous.clear()  # all blank never matches a real line
        return cls(current=current, previous=previous)

    def swap(self) -> None:
        self.previous, self.current = self.current, self.previous


@dataclass
class DumpEngine:
    config: DumpConfig
    sink: OutputSink
    cancel: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def _emit(self, text: str) -> None:
        self.sink.write_line(text)

    def dump_files(self, paths: Iterable[Path]) -> List[DumpResult]:
        results: List[DumpResult] = []
        for p in paths:
            if self.cancelled:
                break
            results.append(self.dump_path(Path(p)))
        return results

    def dump_path(self, path: Path) -> DumpResult:
        self._emit("")
        if not path.is_file():
            log.warning("not a regular file: %s", path)
            self._emit(f"Sorry, {path} is not a file.")
            return DumpResult(str(path), DumpStatus.NOT_A_FILE)

        self._emit(f"Dumping file: {path}")
        try:
            with open(path, "rb") as f:
                return self._dump(str(path), f)
        except OSError as e:
            return self._read_failed(str(path), e)

    def dump_source(self, name: str, source: BinaryIO) -> DumpResult:
        """Dump an already open byte stream; ``name`` appears in the header."""
        self._emit("")
        self._emit(f"Dumping file: {name}")
        try:
            return self._dump(name, source)
        except OSError as e:
            return self._read_failed(name, e)

    def _read_failed(self, name: str, e: OSError) -> DumpResult:
        detail = e.strerror or str(e)
        log.warning("read failed for %s: %s", name, detail)
        self._emit(f"Can't read from input file: {detail}")
        return DumpResult(name, DumpStatus.READ_FAILED)

    def _dump(self, name: str, source: BinaryIO) -> DumpResult:
        log.debug("dumping %s (width=%d, eight_bit=%s)", name, self.config.bytes_per_line, self.config.eight_bit_text)
        width = self.config.bytes_per_line
        st = RunState.start(self.config)

        while not self.cancelled:
            block = source.read(self.config.block_size)
            if not block:
                break
            for c in block:
                if self.cancelled:
                    break
                if st.line_used >= width:
                    self._line_full(st)
                    st.line_used = 0
                    st.current.reset(st.file_offset)
                st.current.set_byte(st.line_used, c)
                st.line_used += 1
                st.file_offset += 1

        if self.cancelled:
            log.info("cancelled %s after %d bytes", name, st.file_offset)
            self._emit(CANCELLED_NOTICE)
            return DumpResult(name, DumpStatus.CANCELLED, st.file_offset)

        # The last line is always shown, even for an empty file.
        if st.same_count == 1:
            self._emit(st.previous.render())
        self._emit(st.current.render())
        self._emit(f"{format_count(st.file_offset)} bytes dumped.")
        self._emit("")
        log.info("dumped %s: %d bytes", name, st.file_offset)
        return DumpResult(name, DumpStatus.FINISHED, st.file_offset)

    def _line_full(self, st: RunState) -> None:
        if not st.current.equals_ignoring_offset(st.previous):
            # a single repeat is printed in full rather than elided
            if st.same_count == 1:
                self._emit(st.previous.render())
            st.same_count = 0
            self._emit(st.current.render())
            st.swap()
            return

        st.same_count += 1
        if st.same_count == 1:
            st.swap()
        elif st.same_count == 2:
            self._emit(ELLIPSIS)
