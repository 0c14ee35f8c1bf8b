#!/usr/bin/env python3
"""Proofmark CLI - spell check documents and manage custom words."""

import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from proofmark.core.config import CHECKER_BACKENDS, EngineConfig
from proofmark.core.exceptions import ProofmarkError
from proofmark.document.loader import load_editor_document
from proofmark.engine import SpellCheckEngine
from proofmark.observability.config import ObservabilityConfig
from proofmark.observability.logging import configure_logging
from proofmark.storage.word_store import CustomWordStore

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (default: PROOFMARK_LOG_LEVEL or WARNING)",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    help="Log format (default: PROOFMARK_LOG_FORMAT or text)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """Proofmark - spell-check annotations for structured documents."""
    ctx.ensure_object(dict)

    if config_file:
        observability = ObservabilityConfig.from_file(config_file)
        engine_config = EngineConfig.load_from_file(Path(config_file))
    else:
        observability = ObservabilityConfig.from_env()
        engine_config = EngineConfig()

    overrides = {}
    if log_level:
        overrides["level"] = log_level.upper()
    if log_format:
        overrides["format"] = log_format
    logging_config = observability.logging.model_copy(update=overrides)
    configure_logging(logging_config)

    ctx.obj["engine_config"] = EngineConfig.from_environment(base=engine_config)


def _build_engine(
    ctx: click.Context,
    words_file: Optional[str],
    backend: Optional[str],
    affix: Optional[str],
    dictionary: Optional[str],
) -> SpellCheckEngine:
    config: EngineConfig = ctx.obj["engine_config"]
    overrides = {}
    if backend:
        overrides["backend"] = backend
    if affix or dictionary:
        overrides.update(affix_path=affix, dictionary_path=dictionary)
    builder = SpellCheckEngine.builder().with_config(replace(config, **overrides))
    if words_file:
        try:
            builder.with_custom_words(CustomWordStore(words_file).list_words())
        except ProofmarkError as e:
            raise click.ClickException(e.message) from e
    return builder.build()


def _initialize(engine: SpellCheckEngine) -> None:
    if not engine.initialize():
        raise click.ClickException("Spell checker could not be initialized (see log for details)")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--dictionary",
    "-d",
    type=click.Path(exists=True, dir_okay=False),
    help="Hunspell .dic file, SymSpell frequency dictionary or word list",
)
@click.option(
    "--affix",
    "-a",
    type=click.Path(exists=True, dir_okay=False),
    help="Hunspell .aff file for the dictionary",
)
@click.option(
    "--backend",
    "-b",
    type=click.Choice(CHECKER_BACKENDS),
    help="Spell checker backend (default: PROOFMARK_BACKEND or auto)",
)
@click.option(
    "--words",
    "-w",
    "words_file",
    type=click.Path(dir_okay=False),
    envvar="PROOFMARK_WORDS_FILE",
    help="JSON file of custom words to accept",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format for the report",
)
@click.option(
    "--timeout",
    type=float,
    default=60.0,
    show_default=True,
    help="Seconds to wait for the checker",
)
@click.pass_context
def check(
    ctx: click.Context,
    input_file: str,
    dictionary: Optional[str],
    affix: Optional[str],
    backend: Optional[str],
    words_file: Optional[str],
    format: str,
    timeout: float,
) -> None:
    """Spell check a document and report misspelled words.

    Exits with status 1 when misspellings are found.
    """
    input_path = Path(input_file)
    try:
        document = load_editor_document(input_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not load {input_path}: {e}") from e

    with _build_engine(ctx, words_file, backend, affix, dictionary) as engine:
        _initialize(engine)
        engine.attach(document)
        engine.wait_for_results(timeout=timeout)
        annotations = list(engine.annotations)

    if format == "json":
        report = {
            "input": str(input_path),
            "error_count": len(annotations),
            "annotations": [annotation.to_dict() for annotation in annotations],
        }
        click.echo(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        for annotation in annotations:
            click.echo(
                f"{input_path}:{annotation.document_start}-{annotation.document_end}: "
                f"{annotation.word}"
            )
        if annotations:
            click.echo(f"✗ Found {len(annotations)} misspelled words")
        else:
            click.echo("✓ No misspellings found")

    if annotations:
        ctx.exit(1)


@cli.command()
@click.argument("word")
@click.option("--dictionary", "-d", type=click.Path(exists=True, dir_okay=False))
@click.option("--affix", "-a", type=click.Path(exists=True, dir_okay=False))
@click.option("--backend", "-b", type=click.Choice(CHECKER_BACKENDS))
@click.option("--timeout", type=float, default=30.0, show_default=True)
@click.pass_context
def suggest(
    ctx: click.Context,
    word: str,
    dictionary: Optional[str],
    affix: Optional[str],
    backend: Optional[str],
    timeout: float,
) -> None:
    """Show replacement suggestions for WORD."""
    with _build_engine(ctx, None, backend, affix, dictionary) as engine:
        _initialize(engine)
        suggestions = engine.suggest(word).result(timeout=timeout)

    if not suggestions:
        click.echo(f"No suggestions for {word!r}")
        return
    for suggestion in suggestions:
        click.echo(suggestion)


@cli.group()
def words() -> None:
    """Manage the custom word list."""


@words.command("add")
@click.argument("word")
@click.option(
    "--words",
    "-w",
    "words_file",
    type=click.Path(dir_okay=False),
    envvar="PROOFMARK_WORDS_FILE",
    required=True,
    help="JSON file of custom words",
)
def add_word(word: str, words_file: str) -> None:
    """Accept WORD so it is never reported."""
    try:
        added = CustomWordStore(words_file).add(word)
    except ProofmarkError as e:
        raise click.ClickException(e.message) from e
    if added:
        click.echo(f"✓ Added {word!r} to {words_file}")
    else:
        click.echo(f"{word!r} is already in {words_file}")


@words.command("list")
@click.option(
    "--words",
    "-w",
    "words_file",
    type=click.Path(dir_okay=False),
    envvar="PROOFMARK_WORDS_FILE",
    required=True,
    help="JSON file of custom words",
)
def list_words(words_file: str) -> None:
    """List the accepted words."""
    try:
        stored = CustomWordStore(words_file).list_words()
    except ProofmarkError as e:
        raise click.ClickException(e.message) from e
    for word in stored:
        click.echo(word)


@cli.command()
def version() -> None:
    """Show Proofmark version."""
    from proofmark import __version__

    click.echo(f"Proofmark v{__version__}")


def main() -> int:
    """Main entry point."""
    try:
        cli()
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
