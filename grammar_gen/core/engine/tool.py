"""Grammar engine backed by the ANTLR 3 command-line tool."""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ...errors import EngineUnavailableError
from .base import EngineBinding, EngineResult, GrammarEngine

# (error pattern, warning pattern) per message format
MESSAGE_PATTERNS: Dict[str, Tuple["re.Pattern[str]", "re.Pattern[str]"]] = {
    "antlr": (re.compile(r"^\s*error\(\d+\)"), re.compile(r"^\s*warning\(\d+\)")),
    "gnu": (re.compile(r":\s*error\b"), re.compile(r":\s*warning\b")),
    "vs2005": (re.compile(r"\)\s*:\s*error\b"), re.compile(r"\)\s*:\s*warning\b")),
}


def count_messages(lines: Iterable[str], message_format: str = "antlr") -> Tuple[int, int]:
    """Count error and warning lines in tool output.

    Parameters
    ----------
    lines : Iterable[str]
        Output lines of the tool
    message_format : str
        Message format the tool was asked to use

    Returns
    -------
    Tuple[int, int]
        (errors, warnings)
    """
    error_re, warning_re = MESSAGE_PATTERNS[message_format]
    errors = warnings = 0
    for line in lines:
        if error_re.search(line):
            errors += 1
        elif warning_re.search(line):
            warnings += 1
    return errors, warnings


class AntlrToolEngine(GrammarEngine):
    """Runs ``org.antlr.Tool`` in a Java subprocess.

    The tool is started once per build pass with the source directory as
    working directory, so the relative grammar paths it receives also decide
    the layout of its output.

    Parameters
    ----------
    classpath : Iterable[str], optional
        Jars or directories holding the ANTLR 3 tool. If empty, the
        ``CLASSPATH`` environment variable is used.
    java : str
        Java executable name or path
    java_options : Iterable[str], optional
        Extra JVM options (e.g. ``-Xmx512m``)
    logger : logging.Logger, optional
        Logger instance. If None, uses the module logger.

    Raises
    ------
    EngineUnavailableError
        If the Java executable or a classpath entry cannot be found

    Example
    -------
    >>> engine = AntlrToolEngine(classpath=["lib/antlr-3.5.3-complete.jar"])
    >>> result = engine.process(binding, ["A.g", "sub/B.g"])
    >>> result.error_count
    0
    """

    TOOL_CLASS = "org.antlr.Tool"

    def __init__(
        self,
        classpath: Optional[Iterable[str]] = None,
        java: str = "java",
        java_options: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)

        java_path = shutil.which(java)
        if java_path is None:
            raise EngineUnavailableError(f"Java executable not found: {java}")
        self.java = java_path

        self.classpath = [str(Path(entry).absolute()) for entry in classpath or ()]
        missing = [entry for entry in self.classpath if not Path(entry).exists()]
        if missing:
            raise EngineUnavailableError(
                f"ANTLR classpath entries not found: {', '.join(missing)}"
            )
        self.java_options = list(java_options or ())

    def build_command(self, binding: EngineBinding, grammar_paths: Sequence[str]) -> List[str]:
        """Build the tool command line for one batch run."""
        cmd = [self.java, *self.java_options]
        if self.classpath:
            cmd += ["-cp", os.pathsep.join(self.classpath)]
        cmd.append(self.TOOL_CLASS)

        # -fo flattens all output into one directory; -o mirrors input paths
        output_flag = "-o" if binding.force_relative_output else "-fo"
        cmd += [output_flag, str(binding.output_directory)]
        # the tool rejects a -lib directory that does not exist
        if binding.lib_directory.is_dir():
            cmd += ["-lib", str(binding.lib_directory)]
        if binding.make:
            cmd.append("-make")
        cmd += binding.options.to_args()
        cmd += list(grammar_paths)
        return cmd

    def process(self, binding: EngineBinding, grammar_paths: Sequence[str]) -> EngineResult:
        cmd = self.build_command(binding, grammar_paths)
        self.logger.debug("Executing: %s", subprocess.list2cmdline(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=str(binding.source_directory),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise EngineUnavailableError(f"Failed to start the ANTLR tool: {e}") from e

        lines = [
            line
            for line in (result.stdout + result.stderr).splitlines()
            if line.strip()
        ]
        error_re, warning_re = MESSAGE_PATTERNS[binding.options.message_format]
        for line in lines:
            if error_re.search(line):
                self.logger.error(line)
            elif warning_re.search(line):
                self.logger.warning(line)
            else:
                self.logger.info(line)

        errors, warnings = count_messages(lines, binding.options.message_format)
        if result.returncode != 0 and errors == 0:
            self.logger.error("ANTLR tool exited with status %d", result.returncode)
            errors = 1

        return EngineResult(
            error_count=errors,
            warning_count=warnings,
            messages=tuple(lines),
            return_code=result.returncode,
        )
