"""Ant-style include/exclude pattern matching.

Patterns are matched against paths relative to a source root, using ``/`` as
the separator regardless of platform:

- ``*`` matches any run of characters within one path segment
- ``?`` matches exactly one character within a path segment
- ``**`` as a whole segment matches zero or more path segments; glued to
  other text it behaves like ``*``
- a trailing ``/`` is shorthand for ``/**``

Matching is case-sensitive and anchored to the whole relative path. Anything
else in a pattern is taken literally.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import FrozenSet, Iterable, Iterator, Tuple, Union

PathLike = Union[str, PurePath]

_SEGMENT_TOKEN = re.compile(
    r"(?P<star>\*+)"
    r"|(?P<ques>\?)"
    r"|(?P<literal>[^*?]+)"
)

GLOBSTAR = "**"


def normalize_pattern(pattern: str) -> str:
    """Convert a user-supplied pattern to its canonical ``/``-separated form."""
    pattern = pattern.strip().replace("\\", "/")
    if pattern.endswith("/"):
        pattern += GLOBSTAR
    return pattern


def _compile_segment(segment: str) -> str:
    regex = ""
    for match in _SEGMENT_TOKEN.finditer(segment):
        if match["star"]:
            # ** glued to other text is an ordinary *
            regex += r"[^/]*"
        elif match["ques"]:
            regex += r"[^/]"
        else:
            regex += re.escape(match["literal"])
    return regex


def compile_pattern(pattern: str) -> "re.Pattern[str]":
    """Translate an Ant-style pattern into an anchored regular expression.

    ``**`` spans directories only when it is a whole path segment.

    Parameters
    ----------
    pattern : str
        Pattern such as ``**/*.g`` or ``imports/**``

    Returns
    -------
    re.Pattern
        Compiled expression to be used with ``fullmatch``
    """
    segments = []
    for segment in normalize_pattern(pattern).split("/"):
        # consecutive globstars collapse into one
        if not (segment == GLOBSTAR and segments and segments[-1] == GLOBSTAR):
            segments.append(segment)
    last = len(segments) - 1
    regex = ""
    need_sep = False
    for i, segment in enumerate(segments):
        if segment == GLOBSTAR:
            if i == 0 and i == last:
                regex += r".*"
            elif i == last:
                # trailing /** : the directory itself or anything below it
                regex += r"(?:/.*)?"
            elif i == 0:
                # **/ : zero or more leading directories
                regex += r"(?:.*/)?"
            else:
                regex += r"/(?:.*/)?"
            need_sep = False
            continue
        if need_sep:
            regex += "/"
        regex += _compile_segment(segment)
        need_sep = True
    return re.compile(regex)


def to_pattern_path(path: PathLike) -> str:
    """Express a relative path with ``/`` separators for matching."""
    if isinstance(path, PurePath):
        return path.as_posix()
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


@dataclass(frozen=True)
class GlobPattern:
    """A single compiled Ant-style pattern.

    Attributes
    ----------
    pattern : str
        The pattern as given by the user
    """

    pattern: str
    regex: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))

    def matches(self, path: PathLike) -> bool:
        """Return True if the whole relative path matches this pattern."""
        return self.regex.fullmatch(to_pattern_path(path)) is not None


class PatternSet:
    """An immutable set of patterns that matches a path if any member does.

    Parameters
    ----------
    patterns : Iterable[str]
        Ant-style patterns; duplicates are dropped and order is irrelevant

    Example
    -------
    >>> excludes = PatternSet(["imports/**", "sub/**"])
    >>> excludes.matches("sub/B.g")
    True
    >>> excludes.matches("A.g")
    False
    """

    def __init__(self, patterns: Iterable[str] = ()):
        if isinstance(patterns, str):
            patterns = [patterns]
        self._patterns: Tuple[GlobPattern, ...] = tuple(
            GlobPattern(p) for p in sorted(set(patterns))
        )

    @property
    def patterns(self) -> FrozenSet[str]:
        return frozenset(p.pattern for p in self._patterns)

    def matches(self, path: PathLike) -> bool:
        """Return True if any pattern in the set matches the relative path."""
        candidate = to_pattern_path(path)
        return any(p.regex.fullmatch(candidate) is not None for p in self._patterns)

    def union(self, patterns: Iterable[str]) -> "PatternSet":
        """Return a new set holding these patterns plus the given ones."""
        return PatternSet(self.patterns | set(patterns))

    def __iter__(self) -> Iterator[str]:
        return (p.pattern for p in self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self.patterns

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PatternSet) and self.patterns == other.patterns

    def __hash__(self) -> int:
        return hash(self.patterns)

    def __repr__(self) -> str:
        return f"PatternSet({sorted(self.patterns)!r})"
