"""Command-line interface for Grammar-Gen.

Provides CLI commands for generating grammar sources and inspecting what a
build pass would do.
"""

import functools
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

import click
import yaml

from grammar_gen import __version__
from grammar_gen.core.discovery import SourceScanner, relativize
from grammar_gen.core.engine import MESSAGE_FORMATS, AntlrToolEngine
from grammar_gen.errors import GrammarBuildError
from grammar_gen.io import log_record
from grammar_gen.pipeline import BuildLogger, BuildProject, GeneratorConfig, run


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("grammar_gen")


def config_options(func: Callable) -> Callable:
    """Directory and pattern options shared by all commands."""
    options = [
        click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
                     help="Configuration file (YAML)"),
        click.option("--base-dir", type=click.Path(file_okay=False),
                     help="Project base directory for relative paths "
                          "(default: config file directory, else the current directory)"),
        click.option("--source-dir", help="Directory holding the grammar files"),
        click.option("--output-dir", help="Directory receiving generated sources"),
        click.option("--lib-dir", help="Directory holding imported grammars and .tokens files"),
        click.option("--include", "includes", multiple=True,
                     help="Ant-style include pattern (repeatable, default: **/*.g)"),
        click.option("--exclude", "excludes", multiple=True,
                     help="Ant-style exclude pattern (repeatable)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def tool_options(func: Callable) -> Callable:
    """Grammar tool options; unset options keep the configured value."""
    options = [
        click.option("--report/--no-report", default=None, help="Report grammar statistics"),
        click.option("--print-grammar/--no-print-grammar", default=None,
                     help="Print grammars without actions"),
        click.option("--debug-parser/--no-debug-parser", "debug_parser", default=None,
                     help="Generate parsers in debug mode"),
        click.option("--profile/--no-profile", default=None, help="Generate profiling parsers"),
        click.option("--nfa/--no-nfa", default=None, help="Emit NFA descriptions (Dot)"),
        click.option("--dfa/--no-dfa", default=None, help="Emit DFA descriptions (Dot)"),
        click.option("--trace/--no-trace", default=None, help="Generate tracing parsers"),
        click.option("--tool-verbose/--no-tool-verbose", "tool_verbose", default=None,
                     help="Verbose tool messages"),
        click.option("--message-format", type=click.Choice(MESSAGE_FORMATS), default=None,
                     help="Format of tool warnings and errors"),
        click.option("--max-switch-case-labels", type=int, default=None,
                     help="Maximum alternatives in a generated switch"),
        click.option("--min-switch-alts", type=int, default=None,
                     help="Minimum alternatives before a switch is generated"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    config_path: Optional[str],
    base_dir: Optional[str],
    source_dir: Optional[str],
    output_dir: Optional[str],
    lib_dir: Optional[str],
    includes: Tuple[str, ...],
    excludes: Tuple[str, ...],
    **options: Any,
) -> GeneratorConfig:
    """Layer command-line values over the configuration file and resolve paths."""
    if config_path:
        config = GeneratorConfig.from_yaml(Path(config_path))
    else:
        config = GeneratorConfig.default()

    if "debug_parser" in options:
        options["debug"] = options.pop("debug_parser")
    if "tool_verbose" in options:
        options["verbose"] = options.pop("tool_verbose")

    config = config.with_overrides(
        source_directory=source_dir,
        output_directory=output_dir,
        lib_directory=lib_dir,
        includes=includes or None,
        excludes=excludes or None,
        **options,
    )

    if base_dir:
        base = Path(base_dir)
    elif config_path:
        base = Path(config_path).parent
    else:
        base = Path.cwd()
    return config.resolve(base)


@click.group()
@click.version_option(version=__version__, prog_name="grammar-gen")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Grammar-Gen: generate parser sources from ANTLR 3 grammars.

    Finds grammar files below a source directory, skips the imports
    subdirectory, and runs the ANTLR tool once over all of them so that
    imported grammars and token vocabularies resolve in a single pass.

    Examples:

        # Generate with the default src/main/antlr3 layout
        grammar-gen generate --antlr-jar lib/antlr-3.5.3-complete.jar

        # List the grammars that would be compiled
        grammar-gen scan --exclude "legacy/**"

        # Show the effective configuration
        grammar-gen show-config --config grammar-gen.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@config_options
@tool_options
@click.option("--antlr-jar", "classpath", multiple=True, type=click.Path(),
              help="Classpath entry holding the ANTLR 3 tool (repeatable)")
@click.option("--java", default="java", show_default=True, help="Java executable")
@click.option("--log-dir", type=click.Path(file_okay=False), help="Directory for build log files")
@click.option("--report-file", type=click.Path(dir_okay=False),
              help="Append the build outcome to this file (.json lines or .yaml)")
@click.pass_context
def generate(
    ctx: click.Context,
    classpath: Tuple[str, ...],
    java: str,
    log_dir: Optional[str],
    report_file: Optional[str],
    **kwargs: Any,
) -> None:
    """Generate sources from every grammar below the source directory.

    Exits with status 1 if the tool reports errors or the build cannot run.
    """
    debug = ctx.obj["debug"]
    build_logger = BuildLogger(log_dir, log_level="DEBUG" if debug else "INFO")
    build_logger.setup()
    logger = build_logger.logger

    try:
        config = build_config(**kwargs)
    except (ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e)) from e

    engine_factory = functools.partial(
        AntlrToolEngine, classpath=classpath, java=java, logger=logger
    )
    project = BuildProject()

    build_logger.log_build_start(config.source_directory)
    try:
        outcome = run(config, engine_factory, project, logger)
    except GrammarBuildError as e:
        build_logger.log_build_error(e.message)
        if report_file:
            log_record(report_file, {"status": "error", "message": e.message})
        ctx.exit(1)

    if report_file:
        log_record(report_file, outcome.to_dict())

    if not outcome.succeeded:
        build_logger.log_build_error(outcome.message)
        ctx.exit(1)

    build_logger.log_build_complete(len(outcome.grammar_paths), outcome.duration)
    for root in project.compile_source_roots:
        click.echo(f"Generated sources: {root}")


@cli.command()
@config_options
@click.pass_context
def scan(ctx: click.Context, **kwargs: Any) -> None:
    """List the grammars a build pass would compile.

    Prints one relative grammar path per line; nothing is generated.
    """
    logger = ctx.obj["logger"]
    try:
        config = build_config(**kwargs)
    except (ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e)) from e

    source_root = config.source_directory
    if not source_root.exists():
        click.echo(f"No ANTLR grammars to compile in {source_root}")
        return

    scanner = SourceScanner(
        config.effective_includes(), config.effective_excludes(), logger=logger
    )
    try:
        grammar_files = scanner.scan(source_root)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not grammar_files:
        click.echo("No grammars to process")
        return

    for grammar in sorted(grammar_files):
        click.echo(relativize(source_root, grammar).path)


@cli.command("show-config")
@config_options
@tool_options
def show_config(**kwargs: Any) -> None:
    """Print the effective configuration as YAML."""
    try:
        config = build_config(**kwargs)
    except (ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e)) from e

    data = config.to_dict()
    data["effective_includes"] = sorted(config.effective_includes())
    data["effective_excludes"] = sorted(config.effective_excludes())
    click.echo(yaml.safe_dump({"grammar_gen": data}, sort_keys=False).rstrip("\n"))


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
