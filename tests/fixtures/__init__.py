"""Test fixtures for Grammar-Gen.

Provides fake engines and grammar tree builders.
"""

from .engines import EngineFactory, RecordingEngine
from .grammar_tree import create_grammar_tree

__all__ = [
    "EngineFactory",
    "RecordingEngine",
    "create_grammar_tree",
]
