"""
Tests for the objdump Runner
============================

subprocess.run is replaced with a fake so these tests do not need objdump
installed. They check the command line that would be run and how each kind
of objdump failure is reported.

Copyright (c) 2022 SECO Mind Srl & Contributors
"""

import subprocess

import pytest

from disasm_util import objdump
from disasm_util.config import DisasmConfig
from disasm_util.errors import ObjdumpError, ObjdumpNotFoundError
from disasm_util.objdump import build_command, disassemble, run_objdump


LISTING = (
    "\n"
    "main.o:     file format elf64-x86-64\n"
    "\n"
    "\n"
    "Disassembly of section .text:\n"
    "\n"
    "<main>:\n"
    "\tpush   %rbp\n"
    "\tret\n"
)


class FakeRun:
    """Records calls to subprocess.run and returns a canned result."""

    def __init__(self, stdout=b"", stderr=b"", returncode=0, raises=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.raises = raises
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(
            cmd, self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def fake_run(monkeypatch):
    def install(**kwargs):
        fake = FakeRun(**kwargs)
        monkeypatch.setattr(objdump.subprocess, "run", fake)
        return fake
    return install


# =============================================================================
# Command Line
# =============================================================================

class TestBuildCommand:
    """Tests for build_command()."""

    def test_default_flags(self):
        assert build_command("main.o") == [
            "objdump", "-d", "--no-addresses", "--no-show-raw-insn", "main.o",
        ]

    def test_custom_executable_and_flags(self):
        cmd = build_command("fw.elf", "arm-none-eabi-objdump", ["-d"])
        assert cmd == ["arm-none-eabi-objdump", "-d", "fw.elf"]


# =============================================================================
# Running objdump
# =============================================================================

class TestRunObjdump:
    """Tests for run_objdump()."""

    def test_returns_stdout(self, fake_run):
        fake = fake_run(stdout=LISTING.encode("utf-8"))
        assert run_objdump("main.o") == LISTING
        cmd, kwargs = fake.calls[0]
        assert cmd[0] == "objdump"
        assert cmd[-1] == "main.o"
        assert kwargs["capture_output"] is True

    def test_passes_timeout(self, fake_run):
        fake = fake_run(stdout=LISTING.encode("utf-8"))
        run_objdump("main.o", timeout=5.0)
        assert fake.calls[0][1]["timeout"] == 5.0

    def test_executable_not_found(self, fake_run):
        fake_run(raises=FileNotFoundError("objdump"))
        with pytest.raises(ObjdumpNotFoundError) as exc_info:
            run_objdump("main.o", executable="my-objdump")
        assert exc_info.value.executable == "my-objdump"
        assert "'my-objdump' was not found!" in str(exc_info.value)

    def test_stderr_is_fatal_even_on_success(self, fake_run):
        fake_run(
            stdout=LISTING.encode("utf-8"),
            stderr=b"objdump: main.o: file format not recognized\n",
            returncode=0,
        )
        with pytest.raises(ObjdumpError, match="file format not recognized") as exc_info:
            run_objdump("main.o")
        assert exc_info.value.stderr == "objdump: main.o: file format not recognized\n"
        assert exc_info.value.return_code == 0

    def test_nonzero_exit_without_stderr(self, fake_run):
        fake_run(returncode=1)
        with pytest.raises(ObjdumpError, match="exited with status 1"):
            run_objdump("main.o")

    def test_timeout(self, fake_run):
        fake_run(raises=subprocess.TimeoutExpired(["objdump"], 1.0))
        with pytest.raises(ObjdumpError, match="timed out"):
            run_objdump("main.o", timeout=1.0)

    def test_invalid_utf8(self, fake_run):
        fake_run(stdout=b"\xff\xfe garbage")
        with pytest.raises(ObjdumpError, match="not valid UTF-8"):
            run_objdump("main.o")

    def test_not_found_is_objdump_error(self, fake_run):
        fake_run(raises=FileNotFoundError("objdump"))
        with pytest.raises(ObjdumpError):
            run_objdump("main.o")


# =============================================================================
# Disassemble (run + parse)
# =============================================================================

class TestDisassemble:
    """Tests for disassemble()."""

    def test_parses_output(self, fake_run):
        fake_run(stdout=LISTING.encode("utf-8"))
        disasm = disassemble("main.o")
        assert disasm.file_name == "main.o"
        assert disasm.file_format == "elf64-x86-64"
        assert str(disasm) == ".text:\n    <main>:\n        push\n        ret\n"

    def test_uses_config(self, fake_run):
        fake = fake_run(stdout=LISTING.encode("utf-8"))
        config = DisasmConfig(objdump="/opt/bin/objdump", objdump_flags=["-d"], timeout=3.0)
        disassemble("main.o", config)
        cmd, kwargs = fake.calls[0]
        assert cmd == ["/opt/bin/objdump", "-d", "main.o"]
        assert kwargs["timeout"] == 3.0
