"""Pytest configuration and shared fixtures for Grammar-Gen tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from grammar_gen.pipeline import GeneratorConfig

from tests.fixtures import EngineFactory, RecordingEngine, create_grammar_tree


# ============================================================================
# Grammar Tree Fixtures
# ============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project base directory."""
    base = tmp_path / "project"
    base.mkdir()
    return base


@pytest.fixture
def grammar_root(project_dir: Path) -> Path:
    """Source root holding A.g, sub/B.g and imports/C.g."""
    return create_grammar_tree(
        project_dir / "src" / "main" / "antlr3",
        ["A.g", "sub/B.g", "imports/C.g"],
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def generator_config(project_dir: Path) -> GeneratorConfig:
    """Default configuration anchored at the project directory."""
    return GeneratorConfig.default().resolve(project_dir)


@pytest.fixture
def sample_config_file(tmp_path: Path) -> Path:
    """Create sample configuration file."""
    import yaml

    config = {
        "grammar_gen": {
            "source_directory": "grammars",
            "output_directory": "build/generated",
            "lib_directory": "grammars/imports",
            "includes": ["**/*.g"],
            "excludes": ["legacy/**"],
            "options": {
                "report": True,
                "message_format": "gnu",
                "max_switch_case_labels": 200,
            },
        },
    }

    path = tmp_path / "grammar-gen.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def recording_engine() -> RecordingEngine:
    """Engine that reports no errors."""
    return RecordingEngine()


@pytest.fixture
def engine_factory(recording_engine: RecordingEngine) -> EngineFactory:
    """Factory handing out the recording engine."""
    return EngineFactory(recording_engine)
