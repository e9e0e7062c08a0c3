"""Grammar-Gen: build-phase ANTLR 3 grammar source generation.

This package provides tools for:
- Discovering grammar files under a source root with Ant-style include/exclude patterns
- Keeping the reserved ``imports`` subtree out of direct compilation
- Mirroring the input directory layout under the generated-sources root
- Driving the external grammar tool over the whole file set in one batch run

Example usage:
    >>> from grammar_gen.pipeline import GeneratorConfig, run
    >>> from grammar_gen.core.engine import AntlrToolEngine
    >>>
    >>> config = GeneratorConfig.from_yaml("grammar-gen.yaml").resolve(".")
    >>> outcome = run(config, lambda: AntlrToolEngine(classpath=["antlr-3.5.3-complete.jar"]))
    >>> outcome.raise_for_status()
"""

__version__ = "0.1.0"
