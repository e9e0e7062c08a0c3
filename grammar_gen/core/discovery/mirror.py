"""Mapping of grammar files to root-relative paths.

The relative path of a grammar is the key handed to the grammar engine, and
its directory part decides where the generated files land below the output
root, so that ``<source>/sub/B.g`` produces output under ``<output>/sub/``.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ...errors import SourceRootViolation


@dataclass(frozen=True)
class RelativeGrammarPath:
    """A grammar file expressed relative to its source root.

    Attributes
    ----------
    subdirectory : str
        Parent directory relative to the root, with a trailing separator,
        or an empty string for files directly at the root
    name : str
        File name of the grammar
    """

    subdirectory: str
    name: str

    @property
    def path(self) -> str:
        return self.subdirectory + self.name

    def output_directory(self, output_root: Path) -> Path:
        """Directory below output_root that receives this grammar's output."""
        if not self.subdirectory:
            return Path(output_root)
        return Path(output_root) / self.subdirectory

    def __str__(self) -> str:
        return self.path


def find_source_subdir(source_root: Union[str, Path], file_path: Union[str, Path]) -> str:
    """Return the mirrored subdirectory of file_path below source_root.

    Raises
    ------
    SourceRootViolation
        If file_path does not start with source_root plus a separator
    """
    root_prefix = str(source_root) + os.sep
    file_path = str(file_path)
    if not file_path.startswith(root_prefix):
        raise SourceRootViolation(
            f"expected {file_path} to be prefixed with {source_root}"
        )
    parent = os.path.dirname(file_path[len(root_prefix):])
    if parent:
        return parent + os.sep
    return ""


def relativize(source_root: Union[str, Path], file_path: Union[str, Path]) -> RelativeGrammarPath:
    """Express file_path relative to source_root.

    Parameters
    ----------
    source_root : str or Path
        The source root the file was discovered under
    file_path : str or Path
        Absolute path of a discovered grammar file

    Returns
    -------
    RelativeGrammarPath
        The mirrored subdirectory and file name

    Raises
    ------
    SourceRootViolation
        If file_path does not lie strictly under source_root

    Example
    -------
    >>> relativize("/proj/src/main/antlr3", "/proj/src/main/antlr3/sub/B.g").path
    'sub/B.g'
    """
    subdirectory = find_source_subdir(source_root, file_path)
    return RelativeGrammarPath(subdirectory=subdirectory, name=os.path.basename(str(file_path)))
