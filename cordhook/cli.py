"""Click CLI for posting to and managing a Discord webhook."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click

from cordhook.client import WebhookClient
from cordhook.config import LOG_LEVELS, load_settings
from cordhook.embed import Embed, EmbedLimitError
from cordhook.errors import CordhookError
from cordhook.identity import parse
from cordhook.models import AllowedMentions, EditBody, MessageBody

T = TypeVar("T")


def _run(ctx: click.Context, operation: Callable[[WebhookClient], Awaitable[T]]) -> T:
    """Build the client, run one operation, close the client."""
    try:
        settings = load_settings(**ctx.obj["overrides"])
    except CordhookError as exc:
        raise click.ClickException(f"{exc} (use --url or WEBHOOK_URL)") from exc

    async def _main() -> T:
        client = WebhookClient(
            settings.url,
            username=settings.username,
            avatar_url=settings.avatar_url,
            http=ctx.obj.get("http"),
        )
        async with client:
            return await operation(client)

    try:
        return asyncio.run(_main())
    except (CordhookError, EmbedLimitError) as exc:
        raise click.ClickException(str(exc)) from exc


def _build_embed(title: str | None, description: str | None, color: str | None) -> Embed | None:
    if not (title or description):
        return None
    embed = Embed()
    if title:
        embed.set_title(title)
    if description:
        embed.set_description(description)
    if color:
        embed.set_color(color)
    return embed


@click.group()
@click.option("--url", default=None, help="Webhook URL (defaults to $WEBHOOK_URL).")
@click.option("--username", default=None, help="Default username for sent messages.")
@click.option("--avatar-url", default=None, help="Default avatar URL for sent messages.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="CORDHOOK_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Logging level (or $CORDHOOK_LOG_LEVEL).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    url: str | None,
    username: str | None,
    avatar_url: str | None,
    log_level: str,
) -> None:
    """Discord webhook client."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {
        "url": url, "username": username, "avatar_url": avatar_url, "log_level": log_level,
    }
    logging.basicConfig(level=log_level.upper())


@cli.command("parse")
@click.argument("url")
def parse_command(url: str) -> None:
    """Print the id and token of a webhook URL."""
    identity = parse(url)
    if identity is None:
        raise click.ClickException("invalid webhook URL")
    click.echo(identity.model_dump_json())


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show the webhook object."""
    result = _run(ctx, lambda client: client.fetch_info())
    click.echo(result.model_dump_json(indent=2, exclude_none=True))
    if result.status != 200:
        ctx.exit(1)


@cli.command()
@click.argument("content")
@click.option("--tts", is_flag=True, help="Send as text-to-speech.")
@click.option("--embed-title", default=None, help="Attach an embed with this title.")
@click.option("--embed-description", default=None, help="Embed description.")
@click.option("--embed-color", default=None, help="Embed color as #rrggbb.")
@click.option("--no-mentions", is_flag=True, help="Suppress all mention notifications.")
@click.pass_context
def send(
    ctx: click.Context,
    content: str,
    tts: bool,
    embed_title: str | None,
    embed_description: str | None,
    embed_color: str | None,
    no_mentions: bool,
) -> None:
    """Send a message and print the created message."""
    fields: dict[str, Any] = {"content": content}
    if tts:
        fields["tts"] = True
    try:
        embed = _build_embed(embed_title, embed_description, embed_color)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--embed-color") from exc
    if embed is not None:
        fields["embeds"] = [embed]
    if no_mentions:
        fields["allowed_mentions"] = AllowedMentions.none()
    body = MessageBody(**fields)

    message = _run(ctx, lambda client: client.send(body))
    click.echo(message.model_dump_json(indent=2))


@cli.command()
@click.argument("message_id")
@click.argument("content")
@click.pass_context
def edit(ctx: click.Context, message_id: str, content: str) -> None:
    """Replace the content of a message sent by this webhook."""
    body = EditBody(content=content)
    message = _run(ctx, lambda client: client.edit_msg(message_id, body))
    click.echo(message.model_dump_json(indent=2))


@cli.command()
@click.argument("message_id")
@click.pass_context
def delete(ctx: click.Context, message_id: str) -> None:
    """Delete a message sent by this webhook."""
    if not _run(ctx, lambda client: client.delete_msg(message_id)):
        raise click.ClickException(f"message {message_id} was not deleted")
    click.echo(f"Deleted message: {message_id}")


@cli.command("delete-self")
@click.confirmation_option(prompt="Delete this webhook permanently?")
@click.pass_context
def delete_self(ctx: click.Context) -> None:
    """Delete the webhook itself."""
    if not _run(ctx, lambda client: client.delete_self()):
        raise click.ClickException("webhook was not deleted")
    click.echo("Webhook deleted")


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Exit 0 if the webhook exists and matches its URL, 1 otherwise."""
    valid = _run(ctx, lambda client: client.is_valid())
    click.echo(json.dumps({"valid": valid}))
    if not valid:
        ctx.exit(1)
