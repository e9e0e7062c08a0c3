"""The boundary between the build orchestrator and a grammar engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Tuple

from .options import ToolOptions


@dataclass(frozen=True)
class EngineBinding:
    """Directories and options bound to the engine for one build pass.

    Attributes
    ----------
    source_directory : Path
        Working directory; grammar paths are relative to it
    output_directory : Path
        Base directory for generated files
    lib_directory : Path
        Where the engine looks for ``.tokens`` files and imported grammars
    options : ToolOptions
        Scalar engine options
    force_relative_output : bool
        Place output below output_directory using each grammar's relative path
    make : bool
        Batch/dependency-aware mode: resolve imports and token vocabularies
        across the whole grammar list before generating
    """

    source_directory: Path
    output_directory: Path
    lib_directory: Path
    options: ToolOptions = field(default_factory=ToolOptions)
    force_relative_output: bool = True
    make: bool = False


@dataclass(frozen=True)
class EngineResult:
    """What the engine reports after a run.

    Attributes
    ----------
    error_count : int
        Number of errors across all grammars
    warning_count : int
        Number of warnings across all grammars
    messages : Tuple[str, ...]
        Raw diagnostic lines, in the order produced
    return_code : int
        Process exit status, 0 for in-process engines
    """

    error_count: int = 0
    warning_count: int = 0
    messages: Tuple[str, ...] = ()
    return_code: int = 0


class GrammarEngine(ABC):
    """A batch grammar compiler.

    Implementations receive the complete grammar list in a single call so
    that cross-file dependencies (imported grammars, shared token
    vocabularies) are resolved within one run. An engine instance belongs to
    one build pass and must not be shared between concurrent builds.
    """

    @abstractmethod
    def process(self, binding: EngineBinding, grammar_paths: Sequence[str]) -> EngineResult:
        """Compile grammar_paths (relative to binding.source_directory).

        Grammar errors are reported through the result's error count rather
        than raised, so that every broken grammar is reported in one pass.
        """
