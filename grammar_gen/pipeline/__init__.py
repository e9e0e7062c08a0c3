"""Build pass orchestration.

Provides YAML-based configuration, build logging and the batch
orchestrator that drives the grammar engine.

Example Usage
-------------
>>> from grammar_gen.pipeline import (
...     BuildLogger,
...     BuildProject,
...     GeneratorConfig,
...     run,
... )
>>> config = GeneratorConfig.from_yaml("grammar-gen.yaml").resolve(".")
>>> build_logger = BuildLogger("logs/")
>>> build_logger.setup()
>>> project = BuildProject()
>>> outcome = run(config, engine_factory, project, build_logger.logger)
"""

# Configuration
from .config import GeneratorConfig

# Logging
from .logger import BuildLogger, ColoredFormatter

# Orchestration
from .orchestrator import (
    BuildOutcome,
    BuildProject,
    BuildStatus,
    GrammarBuildOrchestrator,
    run,
)

__all__ = [
    # Config
    "GeneratorConfig",
    # Logging
    "BuildLogger",
    "ColoredFormatter",
    # Orchestration
    "BuildOutcome",
    "BuildProject",
    "BuildStatus",
    "GrammarBuildOrchestrator",
    "run",
]
