"""Source tree scanning for grammar files."""

import logging
import os
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional, Set, Tuple

from .patterns import PatternSet

GRAMMAR_EXTENSION = "g"
DEFAULT_INCLUDE = f"**/*.{GRAMMAR_EXTENSION}"
IMPORTS_DIRECTORY = "imports"
IMPORTS_EXCLUDE = f"{IMPORTS_DIRECTORY}/**"


def default_includes(includes: Optional[Iterable[str]] = None) -> FrozenSet[str]:
    """Return the include patterns, falling back to every grammar file at any depth."""
    patterns = frozenset(includes or ())
    if not patterns:
        return frozenset({DEFAULT_INCLUDE})
    return patterns


def with_imports_excluded(excludes: Optional[Iterable[str]] = None) -> FrozenSet[str]:
    """Return a new exclude set that also excludes the imports subtree.

    The caller's collection is left untouched.
    """
    return frozenset(excludes or ()) | {IMPORTS_EXCLUDE}


def _raise_walk_error(error: OSError) -> None:
    raise error


def _directory_key(path) -> Tuple[int, int]:
    info = os.stat(path)
    return info.st_dev, info.st_ino


class SourceScanner:
    """Finds grammar files under a source root.

    A file qualifies when its root-relative path matches at least one include
    pattern and no exclude pattern. The imports subtree is always excluded.

    Parameters
    ----------
    includes : Iterable[str], optional
        Include patterns. Empty means ``**/*.g``.
    excludes : Iterable[str], optional
        Exclude patterns, honored as given
    logger : logging.Logger, optional
        Logger instance. If None, uses the module logger.

    Example
    -------
    >>> scanner = SourceScanner(excludes=["sub/**"])
    >>> grammars = scanner.scan(Path("src/main/antlr3").absolute())
    """

    def __init__(
        self,
        includes: Optional[Iterable[str]] = None,
        excludes: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.includes = PatternSet(default_includes(includes))
        self.excludes = PatternSet(with_imports_excluded(excludes))
        self.logger = logger or logging.getLogger(__name__)

    def is_candidate(self, relative_path: str) -> bool:
        """Check a root-relative path against the include and exclude sets."""
        return self.includes.matches(relative_path) and not self.excludes.matches(
            relative_path
        )

    def iter_files(self, source_root: Path) -> Iterator[Path]:
        """Yield every regular file below source_root in a stable order.

        Symlinked directories are followed; a directory reached twice
        through links is walked only once.

        Raises
        ------
        OSError
            If any directory in the tree cannot be listed
        """
        visited = {_directory_key(source_root)}
        for dirpath, dirnames, filenames in os.walk(
            source_root, onerror=_raise_walk_error, followlinks=True
        ):
            kept = []
            for name in sorted(dirnames):
                directory = os.path.join(dirpath, name)
                key = _directory_key(directory)
                if key in visited:
                    self.logger.debug("Skipping already visited directory %s", directory)
                    continue
                visited.add(key)
                kept.append(name)
            dirnames[:] = kept
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if path.is_file():
                    yield path

    def scan(self, source_root: Path) -> Set[Path]:
        """Return the grammar files under source_root.

        Parameters
        ----------
        source_root : Path
            Existing directory to scan

        Returns
        -------
        Set[Path]
            Absolute paths of the qualifying files. May be empty.

        Raises
        ------
        NotADirectoryError
            If source_root is not a directory
        OSError
            If the tree cannot be walked
        """
        source_root = Path(source_root)
        if not source_root.is_dir():
            raise NotADirectoryError(f"Source root is not a directory: {source_root}")

        found: Set[Path] = set()
        for path in self.iter_files(source_root):
            relative = path.relative_to(source_root).as_posix()
            if self.is_candidate(relative):
                found.add(path)
            else:
                self.logger.debug("Skipping %s", relative)
        return found


def scan(
    source_root: Path,
    includes: Optional[Iterable[str]] = None,
    excludes: Optional[Iterable[str]] = None,
) -> Set[Path]:
    """Scan source_root with the given patterns. See :class:`SourceScanner`."""
    return SourceScanner(includes, excludes).scan(source_root)
