"""Unit tests for the grammar engine boundary and the ANTLR tool engine."""

import dataclasses
import subprocess
from pathlib import Path

import pytest

from grammar_gen.core.engine import (
    AntlrToolEngine,
    EngineBinding,
    EngineResult,
    ToolOptions,
    count_messages,
)
from grammar_gen.core.engine import tool as tool_module
from grammar_gen.errors import EngineUnavailableError


class TestToolOptions:
    """Tests for ToolOptions dataclass."""

    def test_default_values(self):
        """Test default option values."""
        options = ToolOptions()
        assert options.report is False
        assert options.print_grammar is False
        assert options.debug is False
        assert options.profile is False
        assert options.nfa is False
        assert options.dfa is False
        assert options.trace is False
        assert options.message_format == "antlr"
        assert options.verbose is True
        assert options.max_switch_case_labels == 300
        assert options.min_switch_alts == 3

    def test_unknown_message_format(self):
        """Test that only known message formats are accepted."""
        with pytest.raises(ValueError, match="message format"):
            ToolOptions(message_format="xml")

    @pytest.mark.parametrize("value", [0, -1, "3", True])
    def test_switch_thresholds_must_be_positive_ints(self, value):
        """Test validation of the switch generation thresholds."""
        with pytest.raises(ValueError):
            ToolOptions(min_switch_alts=value)

    def test_frozen(self):
        """Test that options cannot be changed after construction."""
        options = ToolOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.report = True

    def test_default_args(self):
        """Test the flags generated for default options."""
        assert ToolOptions().to_args() == [
            "-verbose",
            "-message-format", "antlr",
            "-Xmaxswitchcaselabels", "300",
            "-Xminswitchalts", "3",
        ]

    def test_enabled_flags(self):
        """Test that each enabled boolean adds its flag."""
        args = ToolOptions(
            report=True, print_grammar=True, debug=True, profile=True,
            nfa=True, dfa=True, trace=True, verbose=False,
        ).to_args()
        for flag in ["-report", "-print", "-debug", "-profile", "-nfa", "-dfa", "-trace"]:
            assert flag in args
        assert "-verbose" not in args


class TestCountMessages:
    """Tests for parsing tool output."""

    def test_antlr_format(self):
        """Test counting with the default message format."""
        lines = [
            "ANTLR Parser Generator  Version 3.5.3",
            "error(100): T.g:3:1: syntax error",
            "warning(200): T.g:5:3: Decision can match input such as ...",
            "error(160): sub/B.g:1:1: reference to undefined rule",
        ]
        assert count_messages(lines) == (2, 1)

    def test_gnu_format(self):
        """Test counting gnu-style messages."""
        lines = [
            "T.g:3:1: error (100) syntax error",
            "T.g:5:3: warning (200) ambiguity",
        ]
        assert count_messages(lines, "gnu") == (1, 1)

    def test_vs2005_format(self):
        """Test counting Visual Studio style messages."""
        lines = [
            "T.g(3,1) : error 100 : syntax error",
            "T.g(5,3) : warning 200 : ambiguity",
            "T.g(6,3) : warning 200 : ambiguity",
        ]
        assert count_messages(lines, "vs2005") == (1, 2)

    def test_clean_output(self):
        """Test that informational output counts nothing."""
        assert count_messages(["ANTLR Parser Generator  Version 3.5.3"]) == (0, 0)


@pytest.fixture
def fake_java(monkeypatch):
    """Pretend a Java executable is on the PATH."""
    monkeypatch.setattr(tool_module.shutil, "which", lambda name: "/usr/bin/java")


@pytest.fixture
def binding(tmp_path) -> EngineBinding:
    source = tmp_path / "src"
    source.mkdir()
    return EngineBinding(
        source_directory=source,
        output_directory=tmp_path / "out",
        lib_directory=source / "imports",
        make=True,
    )


class RunRecorder:
    """Stands in for subprocess.run."""

    def __init__(self, returncode=0, stdout="", stderr="", error=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


class TestAntlrToolEngine:
    """Tests for AntlrToolEngine."""

    def test_missing_java(self, monkeypatch):
        """Test that a missing Java executable makes the engine unavailable."""
        monkeypatch.setattr(tool_module.shutil, "which", lambda name: None)
        with pytest.raises(EngineUnavailableError, match="Java executable not found"):
            AntlrToolEngine()

    def test_missing_classpath_entry(self, fake_java, tmp_path):
        """Test that a missing jar makes the engine unavailable."""
        with pytest.raises(EngineUnavailableError, match="classpath"):
            AntlrToolEngine(classpath=[str(tmp_path / "antlr.jar")])

    def test_build_command(self, fake_java, tmp_path, binding):
        """Test the command line for a make-mode batch run."""
        jar = tmp_path / "antlr.jar"
        jar.write_bytes(b"")
        binding.lib_directory.mkdir()
        engine = AntlrToolEngine(classpath=[str(jar)], java_options=["-Xmx256m"])

        cmd = engine.build_command(binding, ["A.g", "sub/B.g"])

        assert cmd[:4] == ["/usr/bin/java", "-Xmx256m", "-cp", str(jar.absolute())]
        assert cmd[4] == "org.antlr.Tool"
        assert cmd[cmd.index("-o") + 1] == str(binding.output_directory)
        assert cmd[cmd.index("-lib") + 1] == str(binding.lib_directory)
        assert "-make" in cmd
        assert cmd[-2:] == ["A.g", "sub/B.g"]

    def test_missing_lib_directory_is_not_passed(self, fake_java, binding):
        """Test that -lib is omitted when the imports directory does not exist."""
        assert not binding.lib_directory.exists()
        cmd = AntlrToolEngine().build_command(binding, ["A.g"])
        assert "-lib" not in cmd
        assert str(binding.lib_directory) not in cmd

    def test_missing_lib_directory_does_not_fail_build(self, fake_java, monkeypatch, binding):
        """Test that a clean run without an imports directory reports no errors."""
        recorder = RunRecorder()
        monkeypatch.setattr(tool_module.subprocess, "run", recorder)

        result = AntlrToolEngine().process(binding, ["A.g"])

        assert "-lib" not in recorder.calls[0][0]
        assert result.error_count == 0

    def test_build_command_without_classpath(self, fake_java, binding):
        """Test that -cp is omitted when no classpath is given."""
        cmd = AntlrToolEngine().build_command(binding, ["A.g"])
        assert "-cp" not in cmd

    def test_flattened_output(self, fake_java, binding):
        """Test that disabling relative output uses -fo."""
        flat = dataclasses.replace(binding, force_relative_output=False, make=False)
        cmd = AntlrToolEngine().build_command(flat, ["A.g"])
        assert "-fo" in cmd
        assert "-o" not in cmd
        assert "-make" not in cmd

    def test_process_runs_in_source_directory(self, fake_java, monkeypatch, binding):
        """Test that the tool runs once with the source root as working directory."""
        recorder = RunRecorder(stdout="ANTLR Parser Generator  Version 3.5.3\n")
        monkeypatch.setattr(tool_module.subprocess, "run", recorder)

        result = AntlrToolEngine().process(binding, ["A.g", "sub/B.g"])

        assert len(recorder.calls) == 1
        assert recorder.calls[0][1]["cwd"] == str(binding.source_directory)
        assert result == EngineResult(
            error_count=0,
            warning_count=0,
            messages=("ANTLR Parser Generator  Version 3.5.3",),
            return_code=0,
        )

    def test_process_counts_errors(self, fake_java, monkeypatch, binding):
        """Test that errors and warnings are tallied from the output."""
        recorder = RunRecorder(
            returncode=1,
            stderr="error(100): A.g:3:1: syntax error\nwarning(200): A.g:4:1: ambiguity\n",
        )
        monkeypatch.setattr(tool_module.subprocess, "run", recorder)

        result = AntlrToolEngine().process(binding, ["A.g"])

        assert result.error_count == 1
        assert result.warning_count == 1
        assert result.return_code == 1

    def test_failed_exit_without_messages_is_an_error(self, fake_java, monkeypatch, binding):
        """Test that a crash with unparseable output still fails the pass."""
        monkeypatch.setattr(
            tool_module.subprocess, "run", RunRecorder(returncode=2, stderr="Exception in thread main\n")
        )
        assert AntlrToolEngine().process(binding, ["A.g"]).error_count == 1

    def test_start_failure(self, fake_java, monkeypatch, binding):
        """Test that a tool that cannot be started is reported as unavailable."""
        monkeypatch.setattr(
            tool_module.subprocess, "run", RunRecorder(error=FileNotFoundError("java"))
        )
        with pytest.raises(EngineUnavailableError):
            AntlrToolEngine().process(binding, ["A.g"])
