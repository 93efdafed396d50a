"""CLI entry point for termchat."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from termchat.core.config import DEFAULT_CONFIG_FILE
from termchat.errors import ConfigError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group(invoke_without_command=True)
@click.option(
    "--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, show_default=True,
    help="Config file (YAML)",
)
@click.option("--format", "-f", "format_output", is_flag=True,
              help="Reflow streamed markdown for the terminal")
@click.option("--model", "-m", default=None, help="Model ID (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str,
    format_output: bool,
    model: str | None,
    verbose: bool,
) -> None:
    """termchat -- chat with a language model from the terminal.

    \b
    Usage:
      termchat                       (interactive chat, raw output)
      termchat --format              (render markdown as it streams)
      termchat -c work.yaml -f
      termchat conversations list
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is not None:
        return

    from termchat.core.config import load_config

    try:
        config = load_config(config_path, model=model)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    from termchat.cli.repl import Repl
    from termchat.core.chat import ChatSession
    from termchat.providers.openai import OpenAIProvider

    provider = OpenAIProvider(api_key=config.api_key, model=config.model, base_url=config.base_url)
    session = ChatSession(provider, config)
    repl = Repl(session, format_output=format_output, reflow=config.reflow)
    asyncio.run(repl.run())


def _register_subcommands() -> None:
    """Register CLI subcommands."""
    from termchat.cli.commands import config_cmd, conversations_cmd

    cli.add_command(config_cmd, "config")
    cli.add_command(conversations_cmd, "conversations")


_register_subcommands()


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
