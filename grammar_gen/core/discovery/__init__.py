"""Grammar discovery: pattern matching, source scanning and path mirroring.

Example Usage
-------------
>>> from grammar_gen.core.discovery import SourceScanner, relativize
>>> root = Path("src/main/antlr3").absolute()
>>> for grammar in sorted(SourceScanner().scan(root)):
...     print(relativize(root, grammar).path)
"""

from .patterns import GlobPattern, PatternSet, compile_pattern, normalize_pattern
from .scanner import (
    DEFAULT_INCLUDE,
    GRAMMAR_EXTENSION,
    IMPORTS_DIRECTORY,
    IMPORTS_EXCLUDE,
    SourceScanner,
    default_includes,
    scan,
    with_imports_excluded,
)
from .mirror import RelativeGrammarPath, find_source_subdir, relativize

__all__ = [
    # Patterns
    "GlobPattern",
    "PatternSet",
    "compile_pattern",
    "normalize_pattern",
    # Scanning
    "DEFAULT_INCLUDE",
    "GRAMMAR_EXTENSION",
    "IMPORTS_DIRECTORY",
    "IMPORTS_EXCLUDE",
    "SourceScanner",
    "default_includes",
    "scan",
    "with_imports_excluded",
    # Mirroring
    "RelativeGrammarPath",
    "find_source_subdir",
    "relativize",
]
