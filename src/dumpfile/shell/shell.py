from __future__ import annotations

import cmd
import shlex

from dumpfile.shell.commands import Commands
from dumpfile.utils.logger import get_logger

log = get_logger(__name__)


class DumpShell(cmd.Cmd):
    intro = "dumpfile interactive shell. Type 'help' for commands."
    prompt = "dumpfile> "

    def __init__(self, cmds: Commands):
        super().__init__()
        self.cmds = cmds

    def run_script(self, script: str) -> None:
        parts = [p.strip() for p in script.split(";") if p.strip()]
        for p in parts:
            self.onecmd(p)

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> None:
        try:
            argv = shlex.split(line)
        except ValueError as e:
            print(f"parse error: {e}")
            return
        if not argv:
            return

        handler = getattr(self.cmds, f"cmd_{argv[0]}", None)
        if handler is None:
            print(f"unknown command: {argv[0]}")
            return
        try:
            out = handler(argv[1:])
            if out:
                print(out)
        except Exception as e:
            log.exception("command failed")
            print(f"error: {e}")

    def do_exit(self, arg: str) -> bool:
        if self.cmds.job is not None:
            self.cmds.job.cancel()
        return True

    do_quit = do_exit

    def do_EOF(self, arg: str) -> bool:
        print()
        return self.do_exit(arg)

    def do_open(self, arg: str) -> None:
        """open <file> [file ...]: dump files in the background"""
        self.default("open " + arg)

    def do_wait(self, arg: str) -> None:
        """wait [seconds]: wait for the running dump to finish"""
        self.default("wait " + arg)

    def do_cancel(self, arg: str) -> None:
        """cancel: stop the running dump"""
        self.default("cancel")

    def do_width(self, arg: str) -> None:
        """width [4|8|12|16|24|32]: show or set bytes per line"""
        self.default("width " + arg)

    def do_eightbit(self, arg: str) -> None:
        """eightbit [on|off]: show bytes 0x80-0xFF as text"""
        self.default("eightbit " + arg)

    def do_save(self, arg: str) -> None:
        """save <path>: write the output of the last dump to a file"""
        self.default("save " + arg)

    def do_clear(self, arg: str) -> None:
        """clear: forget the saved output"""
        self.default("clear")

    def do_status(self, arg: str) -> None:
        """status: show settings and results of the last dump"""
        self.default("status")
