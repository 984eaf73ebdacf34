from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Optional, Sequence

from dumpfile.core.config import DumpConfig
from dumpfile.core.engine import CANCELLED_NOTICE, DumpEngine, DumpResult, DumpStatus
from dumpfile.io.sink import OutputSink
from dumpfile.utils.logger import get_logger

log = get_logger(__name__)


class DumpJob:
    """Dumps a list of files on a background thread until done or cancelled."""

    def __init__(self, paths: Sequence[Path], config: DumpConfig, sink: OutputSink):
        self.paths = [Path(p) for p in paths]
        self.config = config
        self.sink = sink
        self.cancel_event = threading.Event()
        self.results: List[DumpResult] = []
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("job already started")
        self._thread = threading.Thread(target=self._run, name="dump-files", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        engine = DumpEngine(config=self.config, sink=self.sink, cancel=self.cancel_event)
        try:
            self.results = engine.dump_files(self.paths)
            stopped_between = len(self.results) < len(self.paths) and (
                not self.results or self.results[-1].status is not DumpStatus.CANCELLED
            )
            if stopped_between:
                self.sink.write_line(CANCELLED_NOTICE)
        except Exception:
            log.exception("dump job failed")
            raise

    def cancel(self) -> bool:
        """Request a stop. Returns False when there was nothing to cancel."""
        if not self.running:
            return False
        self.cancel_event.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()
