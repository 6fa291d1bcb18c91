"""CLI command implementations for the Mailchimp batch tools."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

import click
from pydantic import ValidationError

from chimpkit.exceptions import ChimpkitError
from chimpkit.models.config import Config
from chimpkit.models.operation import Operation
from chimpkit.services.batch_poller import wait_for_batch
from chimpkit.services.client import MailchimpClient
from chimpkit.utils.health_checks import check_mailchimp_health
from chimpkit.utils.logger import configure_logging

if TYPE_CHECKING:
    from chimpkit.models.batch import Batch


def _get_config() -> Config:
    """Load configuration from .env file."""
    return Config()  # type: ignore[call-arg]


def _get_client(config: Config) -> MailchimpClient:
    return MailchimpClient.from_config(config)


def _fail(message: str) -> NoReturn:
    click.echo(f"[ERROR] {message}")
    raise SystemExit(1)


def _print_batch(title: str, batch: Batch, output_format: str) -> None:
    """Print a batch status either as a summary or as JSON."""
    if output_format == "json":
        click.echo(json.dumps(batch.model_dump(), indent=2))
        return

    click.echo(f"\n[SUCCESS] {title}")
    click.echo(f"  id: {batch.id}")
    click.echo(f"  status: {batch.status}")
    click.echo(
        f"  operations: {batch.finished_operations}/{batch.total_operations} finished, "
        f"{batch.errored_operations} errored ({batch.progress_percentage:.1f}%)"
    )
    click.echo(f"  submitted_at: {batch.submitted_at or '-'}")
    if batch.is_finished:
        click.echo(f"  completed_at: {batch.completed_at or '-'}")
        click.echo(f"  results: {batch.result_url or '-'}")


def _load_operations(path: Path) -> list[Operation]:
    """Read operations from a JSON list or a ``{"operations": [...]}`` document."""
    document: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(document, dict):
        document = document.get("operations")
    if not isinstance(document, list):
        msg = "expected a list of operations or an object with an 'operations' list"
        raise ValueError(msg)
    return [Operation.model_validate(item) for item in document]


def _wait(
    client: MailchimpClient, batch_id: str, poll_interval: float, timeout: float | None
) -> Batch:
    def echo_progress(batch: Batch) -> None:
        click.echo(
            f"[INFO] {batch.status}: {batch.finished_operations}/{batch.total_operations} "
            f"finished, {batch.errored_operations} errored"
        )

    return wait_for_batch(
        client.get_batch,
        batch_id,
        poll_interval=poll_interval,
        timeout=timeout,
        on_poll=echo_progress,
    )


_output_format_option = click.option(
    "--output-format",
    default="summary",
    type=click.Choice(["summary", "json"]),
    help="Output format",
)
_wait_option = click.option("--wait", is_flag=True, help="Poll until the batch finished")
_poll_interval_option = click.option(
    "--poll-interval",
    default=None,
    type=float,
    help="Seconds between polls (default from config)",
)
_timeout_option = click.option(
    "--timeout", default=None, type=float, help="Give up waiting after this many seconds"
)


@click.command()
def ping() -> None:
    """Check that the Mailchimp API is reachable with the configured key."""
    config = _get_config()
    configure_logging(config.log_level)
    try:
        client = _get_client(config)
    except ChimpkitError as exc:
        _fail(str(exc))

    if check_mailchimp_health(client.transport):
        click.echo("[SUCCESS] Mailchimp API is reachable.")
    else:
        _fail("Mailchimp API is not reachable.")


@click.command()
@click.argument("batch_id")
@_wait_option
@_poll_interval_option
@_timeout_option
@_output_format_option
def batch_status(
    batch_id: str,
    wait: bool,
    poll_interval: float | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Show the status of a submitted batch."""
    config = _get_config()
    configure_logging(config.log_level)

    try:
        client = _get_client(config)
        if wait:
            batch = _wait(client, batch_id, poll_interval or config.batch_poll_interval, timeout)
        else:
            batch = client.get_batch(batch_id)
    except ChimpkitError as exc:
        _fail(str(exc))

    _print_batch("Batch status", batch, output_format)


@click.command()
@click.argument("operations_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_wait_option
@_poll_interval_option
@_timeout_option
@_output_format_option
def submit_batch(
    operations_file: Path,
    wait: bool,
    poll_interval: float | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Submit the operations in OPERATIONS_FILE as one batch."""
    config = _get_config()
    configure_logging(config.log_level)

    try:
        operations = _load_operations(operations_file)
    except (ValueError, ValidationError) as exc:
        _fail(f"Invalid operations file: {exc}")

    if not operations:
        _fail("No operations to submit.")

    try:
        client = _get_client(config)
        queue = client.new_batch()
        for operation in operations:
            queue.add(operation)

        click.echo(f"[INFO] Submitting {len(queue)} operations...")
        batch = client.run_batch()

        if wait:
            batch = _wait(client, batch.id, poll_interval or config.batch_poll_interval, timeout)
    except ChimpkitError as exc:
        _fail(str(exc))

    _print_batch("Batch submitted", batch, output_format)
