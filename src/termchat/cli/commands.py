"""CLI subcommands for termchat (config, conversations)."""

from __future__ import annotations

import click

from termchat.errors import TermchatError


def _load_file_config(ctx: click.Context) -> dict:
    from termchat.core.config import load_yaml_config

    try:
        return load_yaml_config(ctx.obj["config_path"])
    except TermchatError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


def _store(ctx: click.Context):
    from termchat.core.conversation import ConversationStore

    data = _load_file_config(ctx)
    return ConversationStore(data.get("conversations_dir", "./conversations"))


@click.group()
def config_cmd() -> None:
    """Inspect termchat configuration."""


@config_cmd.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the config file contents (API key masked)."""
    from termchat.core.config import resolve_api_key

    data = _load_file_config(ctx)
    click.echo(f"Config file: {ctx.obj['config_path']}")
    key = resolve_api_key(data)
    click.echo(f"  api_key: {key[:8] + '...' if key else '(not set)'}")
    chat = data.get("chat") or {}
    for k in ("model", "base_url", "user_info"):
        if chat.get(k):
            click.echo(f"  {k}: {chat[k]}")
    for k, v in sorted((data.get("reflow") or {}).items()):
        click.echo(f"  reflow.{k}: {v}")
    click.echo(f"  conversations_dir: {data.get('conversations_dir', './conversations')}")


@click.group()
def conversations_cmd() -> None:
    """Manage saved conversations."""


@conversations_cmd.command("list")
@click.pass_context
def conversations_list(ctx: click.Context) -> None:
    """List saved conversations."""
    names = _store(ctx).list_names()
    if not names:
        click.echo("No conversations found.")
        return
    for name in names:
        click.echo(name)


@conversations_cmd.command("show")
@click.argument("name")
@click.pass_context
def conversations_show(ctx: click.Context, name: str) -> None:
    """Show the messages of a saved conversation."""
    try:
        messages = _store(ctx).load(name)
    except TermchatError as exc:
        click.echo(f"Error loading conversation: {exc}", err=True)
        raise SystemExit(1)

    click.echo(f"Messages ({len(messages)}):")
    for i, msg in enumerate(messages):
        if isinstance(msg.content, str):
            preview = msg.content[:100]
            if len(msg.content) > 100:
                preview += "..."
        else:
            preview = f"[{len(msg.content)} content parts]"
        click.echo(f"  {i + 1}. [{msg.role}] {preview}")
