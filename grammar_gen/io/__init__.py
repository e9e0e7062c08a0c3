"""I/O utilities for Grammar-Gen.

Provides structured build records.
"""

from .logging import log_json, log_record, log_yaml

__all__ = [
    "log_json",
    "log_record",
    "log_yaml",
]
