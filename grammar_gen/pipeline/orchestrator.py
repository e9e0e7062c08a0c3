"""Batch orchestration of a grammar build pass.

One pass scans the source root, hands the complete list of relative grammar
paths to the engine in a single batch run, and turns the engine's error
tally into a pass/fail outcome for the enclosing build.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.discovery import RelativeGrammarPath, SourceScanner, relativize
from ..core.engine import EngineBinding, GrammarEngine
from ..errors import (
    CompilationError,
    DiscoveryError,
    EngineUnavailableError,
)
from .config import GeneratorConfig

EngineFactory = Callable[[], GrammarEngine]


class BuildStatus(str, Enum):
    """How a build pass ended."""

    SUCCESS = "success"
    NO_SOURCE_ROOT = "no_source_root"
    NO_GRAMMARS = "no_grammars"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildOutcome:
    """Result of one build pass.

    Attributes
    ----------
    status : BuildStatus
        How the pass ended
    grammar_paths : Tuple[str, ...]
        Relative grammar paths handed to the engine
    error_count : int
        Errors reported by the engine
    warning_count : int
        Warnings reported by the engine
    message : str
        Human-readable summary
    duration : float
        Wall time of the pass in seconds
    """

    status: BuildStatus
    grammar_paths: Tuple[str, ...] = ()
    error_count: int = 0
    warning_count: int = 0
    message: str = ""
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status is not BuildStatus.FAILED

    def raise_for_status(self) -> None:
        """Raise CompilationError if the pass failed."""
        if not self.succeeded:
            raise CompilationError(self.error_count, self.message or None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "grammar_paths": list(self.grammar_paths),
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "message": self.message,
            "duration": round(self.duration, 3),
        }


class BuildProject:
    """The enclosing build as seen by the orchestrator.

    Collects the directories that later build phases should compile.

    Parameters
    ----------
    base_dir : Path, optional
        Project base directory
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else None
        self.compile_source_roots: List[Path] = []

    def add_compile_source_root(self, path: Path) -> None:
        path = Path(path)
        if path not in self.compile_source_roots:
            self.compile_source_roots.append(path)


class GrammarBuildOrchestrator:
    """Runs one grammar build pass.

    Parameters
    ----------
    config : GeneratorConfig
        Configuration with absolute directories (see GeneratorConfig.resolve)
    engine_factory : Callable[[], GrammarEngine]
        Creates a fresh engine for this pass
    project : BuildProject, optional
        Receives the output directory as a compile source root on success
    logger : logging.Logger, optional
        Logger instance. If None, uses the module logger.

    Example
    -------
    >>> orchestrator = GrammarBuildOrchestrator(config, AntlrToolEngine, project)
    >>> outcome = orchestrator.run()
    >>> outcome.succeeded
    True
    """

    def __init__(
        self,
        config: GeneratorConfig,
        engine_factory: EngineFactory,
        project: Optional[BuildProject] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.engine_factory = engine_factory
        self.project = project
        self.logger = logger or logging.getLogger(__name__)

    def log_configuration(self) -> None:
        """Dump every setting at debug level."""
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        config = self.config
        for pattern in sorted(config.effective_excludes()):
            self.logger.debug("ANTLR: Exclude: %s", pattern)
        for pattern in sorted(config.effective_includes()):
            self.logger.debug("ANTLR: Include: %s", pattern)
        self.logger.debug("ANTLR: Output: %s", config.output_directory)
        self.logger.debug("ANTLR: Library: %s", config.lib_directory)
        for name, value in config.options.to_dict().items():
            self.logger.debug("ANTLR: %-22s: %s", name, value)

    def create_engine(self) -> GrammarEngine:
        """Construct the engine for this pass.

        Raises
        ------
        EngineUnavailableError
            If the factory fails for any reason
        """
        try:
            return self.engine_factory()
        except EngineUnavailableError:
            self.logger.error("The attempt to create the ANTLR build tool failed")
            raise
        except Exception as e:
            self.logger.error("The attempt to create the ANTLR build tool failed")
            raise EngineUnavailableError(
                f"Unable to create the ANTLR build tool: {e}"
            ) from e

    def discover(self, source_root: Path) -> List[RelativeGrammarPath]:
        """Find the grammars to compile, as paths relative to source_root.

        Raises
        ------
        DiscoveryError
            If scanning the source tree fails
        SourceRootViolation
            If a discovered file does not lie under source_root
        """
        scanner = SourceScanner(
            self.config.effective_includes(),
            self.config.effective_excludes(),
            logger=self.logger,
        )
        try:
            grammar_files = scanner.scan(source_root)
        except Exception as e:
            self.logger.error("%s", e)
            raise DiscoveryError(
                "Fatal error occurred while evaluating the names of the "
                f"grammar files to analyze: {e}"
            ) from e

        grammars = []
        for grammar in sorted(grammar_files):
            self.logger.debug("Grammar file '%s' detected.", grammar)
            relative = relativize(source_root, grammar)
            self.logger.debug("  ... relative path is: %s", relative.path)
            grammars.append(relative)
        return grammars

    def _register_output(self) -> None:
        if self.project is not None:
            self.project.add_compile_source_root(self.config.output_directory)

    def run(self) -> BuildOutcome:
        """Execute the build pass.

        Returns
        -------
        BuildOutcome
            FAILED when the engine reported errors, otherwise a successful status

        Raises
        ------
        EngineUnavailableError
            If the engine cannot be constructed
        DiscoveryError
            If the source tree cannot be scanned
        SourceRootViolation
            If discovery and relativization disagree about the source root
        """
        start_time = time.time()
        config = self.config
        self.log_configuration()

        config.output_directory.mkdir(parents=True, exist_ok=True)

        engine = self.create_engine()

        source_root = config.source_directory
        if not source_root.exists():
            message = f"No ANTLR grammars to compile in {source_root}"
            self.logger.info(message)
            return BuildOutcome(
                status=BuildStatus.NO_SOURCE_ROOT,
                message=message,
                duration=time.time() - start_time,
            )

        self.logger.info("ANTLR: Processing source directory %s", source_root)
        grammars = self.discover(source_root)

        if not grammars:
            message = "No grammars to process"
            self.logger.info(message)
            self._register_output()
            return BuildOutcome(
                status=BuildStatus.NO_GRAMMARS,
                message=message,
                duration=time.time() - start_time,
            )

        binding = EngineBinding(
            source_directory=source_root,
            output_directory=config.output_directory,
            lib_directory=config.lib_directory,
            options=config.options,
            force_relative_output=True,
            make=True,
        )
        grammar_paths = tuple(g.path for g in grammars)
        self.logger.debug("Output directory base will be %s", binding.output_directory)

        result = engine.process(binding, grammar_paths)

        if result.error_count > 0:
            message = f"ANTLR caught {result.error_count} build errors."
            self.logger.error(message)
            return BuildOutcome(
                status=BuildStatus.FAILED,
                grammar_paths=grammar_paths,
                error_count=result.error_count,
                warning_count=result.warning_count,
                message=message,
                duration=time.time() - start_time,
            )

        self._register_output()
        return BuildOutcome(
            status=BuildStatus.SUCCESS,
            grammar_paths=grammar_paths,
            warning_count=result.warning_count,
            message=f"Processed {len(grammar_paths)} grammar(s)",
            duration=time.time() - start_time,
        )


def run(
    config: GeneratorConfig,
    engine_factory: EngineFactory,
    project: Optional[BuildProject] = None,
    logger: Optional[logging.Logger] = None,
) -> BuildOutcome:
    """Run one grammar build pass. See :class:`GrammarBuildOrchestrator`."""
    return GrammarBuildOrchestrator(config, engine_factory, project, logger).run()
