from __future__ import annotations

import locale
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dumpfile.core.config import DumpConfig
from dumpfile.core.engine import DumpEngine, DumpResult
from dumpfile.io.sink import StreamSink
from dumpfile.shell.commands import Commands
from dumpfile.shell.shell import DumpShell
from dumpfile.utils.logger import get_logger, setup_logging

log = get_logger(__name__)


def read_script(path: str) -> str:
    """Load a startup script: ';' or newline separated, '#' starts a comment line."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        raw = f.read()
    cleaned_lines = []
    for ln in raw.splitlines():
        s = ln.strip()
        if not s or s.startswith("#"):
            continue
        cleaned_lines.append(s)
    return ";".join(cleaned_lines)


def dump_to(files: Sequence[Path], config: DumpConfig, output: Optional[Path]) -> List[DumpResult]:
    if output is None:
        engine = DumpEngine(config=config, sink=StreamSink(sys.stdout))
        return engine.dump_files(files)
    with open(output, "w", encoding="utf-8") as f:
        engine = DumpEngine(config=config, sink=StreamSink(f))
        results = engine.dump_files(files)
    log.info("wrote dump of %d file(s) to %s", len(results), output)
    return results


def run_app(
    files: Sequence[Path],
    config: DumpConfig,
    output: Optional[Path] = None,
    shell: bool = False,
    cmd: str = "",
    cfg: Optional[str] = None,
    log_level: str = "WARNING",
    quiet: bool = False,
) -> List[DumpResult]:
    setup_logging(level=log_level, quiet=quiet)
    try:
        locale.setlocale(locale.LC_NUMERIC, "")
    except locale.Error as e:
        log.warning("keeping default number format: %s", e)
    log.info("dumpfile starting: width=%d eight_bit=%s", config.bytes_per_line, config.eight_bit_text)

    results: List[DumpResult] = []
    if files:
        results = dump_to(files, config, output)
        if not shell:
            return results

    sh = DumpShell(Commands(config=config, out=StreamSink(sys.stdout, flush=True)))
    if cfg:
        script = read_script(cfg)
        if script.strip():
            sh.run_script(script)

    if cmd.strip():
        sh.run_script(cmd)

    if shell or not cmd.strip():
        sh.cmdloop()
    elif sh.cmds.job is not None:
        # scripted run: let the last dump finish before exiting
        sh.cmds.job.wait()
    return results
