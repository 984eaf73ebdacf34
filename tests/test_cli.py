"""
Tests for the command line and the interactive shell commands.
"""

import io
import shlex
import sys

import pytest

from dumpfile.__main__ import main
from dumpfile.core.config import DumpConfig
from dumpfile.io.sink import ListSink
from dumpfile.shell.commands import Commands


def test_main_dumps_files(tmp_path, capsys):
    f = tmp_path / "msdos.sys"
    f.write_bytes(b";SYS\r\n[Paths]\r\nWinDir=C:")
    main([str(f), "-w", "8"])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "",
        f"Dumping file: {f}",
        "00000000  3B 53 59 53 0D 0A 5B 50  |;SYS..[P|",
        "00000008  61 74 68 73 5D 0D 0A 57  |aths]..W|",
        f"00000010  {'69 6E 44 69 72 3D 43 3A':<23}  |inDir=C:|",
        "24 bytes dumped.",
        "",
    ]


def test_main_eight_bit_and_output_file(tmp_path, capsys):
    f = tmp_path / "latin.bin"
    f.write_bytes(b"caf\xe9")
    out_file = tmp_path / "dump.txt"
    main([str(f), "-e", "-w", "4", "-o", str(out_file)])
    assert capsys.readouterr().out == ""
    text = out_file.read_text(encoding="utf-8")
    assert "00000000  63 61 66 E9  |café|\n" in text
    assert "4 bytes dumped.\n" in text


def test_main_reports_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing"
    main([str(missing)])
    assert f"Sorry, {missing} is not a file." in capsys.readouterr().out


def test_main_rejects_bad_options(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path), "-w", "7"])
    with pytest.raises(SystemExit):
        main([str(tmp_path), "--offset-digits", "0"])


def test_main_scripted_shell(tmp_path, capsys):
    f = tmp_path / "data.bin"
    f.write_bytes(b"A" * 20)
    saved = tmp_path / "saved.txt"
    script = f"width 4; eightbit on; open {shlex.quote(str(f))}; wait; save {shlex.quote(str(saved))}"
    main(["--cmd", script])
    out = capsys.readouterr().out
    assert "width = 4" in out
    assert "eightbit = on" in out
    assert "00000000  41 41 41 41  |AAAA|" in out
    assert "   ..." in out
    assert "20 bytes dumped." in out
    assert saved.read_text(encoding="utf-8").splitlines() == [
        "",
        f"Dumping file: {f}",
        "00000000  41 41 41 41  |AAAA|",
        "   ...",
        "00000010  41 41 41 41  |AAAA|",
        "20 bytes dumped.",
        "",
    ]


def test_main_runs_startup_script(tmp_path, capsys):
    cfg = tmp_path / "start.cfg"
    cfg.write_text("# settings\nwidth 32\n\nstatus\n", encoding="utf-8")
    main(["--cfg", str(cfg), "--cmd", "status"])
    out = capsys.readouterr().out
    assert out.count("width = 32") == 3


def test_commands_validate_settings():
    cmds = Commands(config=DumpConfig(), out=ListSink())
    assert cmds.cmd_width([]) == "width = 16"
    assert cmds.cmd_width(["7"]).startswith("width must be one of")
    assert cmds.cmd_width(["24"]) == "width = 24"
    assert cmds.config.bytes_per_line == 24
    assert cmds.cmd_eightbit(["on"]) == "eightbit = on"
    with pytest.raises(ValueError):
        cmds.cmd_eightbit(["maybe"])
    assert cmds.cmd_cancel([]) == "nothing to cancel"
    assert cmds.cmd_wait([]) == "nothing to wait for"
    assert cmds.cmd_open([]).startswith("usage:")


def test_commands_status_after_dump(tmp_path):
    f = tmp_path / "x.bin"
    f.write_bytes(b"\x00" * 1500)
    out = ListSink()
    cmds = Commands(config=DumpConfig(), out=out)
    cmds.cmd_open([str(f)])
    cmds.cmd_wait([])
    status = cmds.cmd_status([])
    assert f"{f}: finished, 1,500 bytes" in status
    assert out.lines == cmds.transcript.lines
    assert out.lines[-2] == "1,500 bytes dumped."


def test_main_eight_bit_on_narrow_console(tmp_path, monkeypatch):
    """Bytes the console encoding lacks show as '?' and later files still dump."""
    first = tmp_path / "first.bin"
    first.write_bytes(b"ab\x81c")
    second = tmp_path / "second.bin"
    second.write_bytes(b"xy")
    raw = io.BytesIO()
    console = io.TextIOWrapper(raw, encoding="cp1252", newline="\n")
    monkeypatch.setattr(sys, "stdout", console)
    main(["-e", "-w", "4", str(first), str(second)])
    console.flush()
    out = raw.getvalue().decode("cp1252").splitlines()
    assert "00000000  61 62 81 63  |ab?c|" in out
    assert "4 bytes dumped." in out
    assert f"Dumping file: {second}" in out
    assert "2 bytes dumped." in out


def test_main_rejects_unwritable_output(tmp_path, capsys):
    f = tmp_path / "data.bin"
    f.write_bytes(b"data")
    with pytest.raises(SystemExit) as exc:
        main([str(f), "-o", str(tmp_path / "no-such-dir" / "out.txt")])
    assert exc.value.code == 2
    assert "no-such-dir" in capsys.readouterr().err
