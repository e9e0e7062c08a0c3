"""Command-line interface for Grammar-Gen.

Example Usage
-------------
    # From command line:
    grammar-gen --help
    grammar-gen generate --antlr-jar lib/antlr-3.5.3-complete.jar
    grammar-gen scan --source-dir src/main/antlr3
    grammar-gen show-config --config grammar-gen.yaml
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
