"""CLI entry point for the Mailchimp batch tools."""

from __future__ import annotations

import click

from chimpkit.cli.commands import batch_status, ping, submit_batch


@click.group()
def cli() -> None:
    """Mailchimp API client with request batching."""


cli.add_command(ping)
cli.add_command(batch_status)
cli.add_command(submit_batch)
