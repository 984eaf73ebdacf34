from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from dumpfile.core.config import DUMP_WIDTHS, DumpConfig
from dumpfile.io.sink import ListSink, OutputSink, TeeSink
from dumpfile.runner import DumpJob
from dumpfile.utils.hexfmt import format_count


def _on_off(s: str) -> bool:
    v = s.lower()
    if v in ("on", "1", "true", "yes"):
        return True
    if v in ("off", "0", "false", "no"):
        return False
    raise ValueError(f"expected on|off, got {s!r}")


@dataclass
class Commands:
    config: DumpConfig
    out: OutputSink
    transcript: ListSink = field(default_factory=ListSink)
    job: Optional[DumpJob] = None

    def cmd_open(self, argv: list[str]) -> str:
        if not argv:
            return "usage: open <file> [file ...]"
        if self.job is not None and self.job.running:
            return "a dump is already running; use 'cancel' or 'wait'"
        self.transcript.clear()
        self.job = DumpJob([Path(a) for a in argv], self.config, TeeSink(self.out, self.transcript))
        self.job.start()
        return ""

    def cmd_wait(self, argv: list[str]) -> str:
        if self.job is None:
            return "nothing to wait for"
        timeout = float(argv[0]) if argv else None
        if not self.job.wait(timeout):
            return "still running"
        return ""

    def cmd_cancel(self, argv: list[str]) -> str:
        if self.job is None or not self.job.cancel():
            return "nothing to cancel"
        self.job.wait()
        return ""

    def cmd_width(self, argv: list[str]) -> str:
        if argv:
            w = int(argv[0], 0)
            if w not in DUMP_WIDTHS:
                return f"width must be one of {', '.join(str(x) for x in DUMP_WIDTHS)}"
            self.config = replace(self.config, bytes_per_line=w)
        return f"width = {self.config.bytes_per_line}"

    def cmd_eightbit(self, argv: list[str]) -> str:
        if argv:
            self.config = replace(self.config, eight_bit_text=_on_off(argv[0]))
        return f"eightbit = {'on' if self.config.eight_bit_text else 'off'}"

    def cmd_save(self, argv: list[str]) -> str:
        if len(argv) != 1:
            return "usage: save <path>"
        n = self.transcript.save(Path(argv[0]))
        return f"saved {format_count(n)} characters to {argv[0]}"

    def cmd_clear(self, argv: list[str]) -> str:
        self.transcript.clear()
        return ""

    def cmd_status(self, argv: list[str]) -> str:
        lines = [
            f"width = {self.config.bytes_per_line}",
            f"eightbit = {'on' if self.config.eight_bit_text else 'off'}",
        ]
        if self.job is None:
            lines.append("job = none")
        elif self.job.running:
            lines.append("job = running")
        else:
            for r in self.job.results:
                lines.append(f"{r.name}: {r.status.value}, {format_count(r.byte_count)} bytes")
        return "\n".join(lines)
