"""
Tests for DisasmConfig and RenderOptions.
"""

import pytest

from disasm_util.config import (
    CANONICAL,
    DEFAULT_OBJDUMP_FLAGS,
    DisasmConfig,
    RenderOptions,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DISASM_UTIL_OBJDUMP",
        "DISASM_UTIL_TIMEOUT",
        "DISASM_UTIL_INCLUDE_OPERANDS",
        "DISASM_UTIL_INCLUDE_COMMENTS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDisasmConfig:
    """Tests for configuration defaults and environment overrides."""

    def test_defaults(self):
        config = DisasmConfig()
        assert config.objdump == "objdump"
        assert config.objdump_flags == list(DEFAULT_OBJDUMP_FLAGS)
        assert config.timeout == 60.0
        assert config.render_options() == CANONICAL

    def test_flags_are_not_shared(self):
        a = DisasmConfig()
        a.objdump_flags.append("-M intel")
        assert DisasmConfig().objdump_flags == list(DEFAULT_OBJDUMP_FLAGS)

    def test_from_env_without_variables(self):
        assert DisasmConfig.from_env() == DisasmConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DISASM_UTIL_OBJDUMP", "/usr/bin/llvm-objdump")
        monkeypatch.setenv("DISASM_UTIL_TIMEOUT", "2.5")
        monkeypatch.setenv("DISASM_UTIL_INCLUDE_OPERANDS", "TRUE")
        monkeypatch.setenv("DISASM_UTIL_INCLUDE_COMMENTS", "on")

        config = DisasmConfig.from_env()
        assert config.objdump == "/usr/bin/llvm-objdump"
        assert config.timeout == 2.5
        assert config.render_options() == RenderOptions(
            include_operands=True, include_comments=True
        )

    def test_from_env_invalid_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv("DISASM_UTIL_TIMEOUT", "soon")
        assert DisasmConfig.from_env().timeout == 60.0

    def test_from_env_falsy_flag(self, monkeypatch):
        monkeypatch.setenv("DISASM_UTIL_INCLUDE_OPERANDS", "0")
        assert DisasmConfig.from_env().include_operands is False


class TestRenderOptions:
    """Tests for RenderOptions."""

    def test_canonical_keeps_opcodes_only(self):
        assert CANONICAL.include_operands is False
        assert CANONICAL.include_comments is False

    def test_frozen(self):
        with pytest.raises(AttributeError):
            CANONICAL.include_operands = True
