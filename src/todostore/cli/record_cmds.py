"""Record commands: create, list, show, update, delete, next-id."""

from __future__ import annotations

import click

from todostore.cli.helpers import (
    json_envelope,
    output_options,
    output_result,
    require_config,
    require_store,
    store_errors,
)
from todostore.cli.main import cli
from todostore.storage.counter import SequenceGenerator


def _preview(text: str, width: int = 60) -> str:
    """First line of *text*, truncated for one-line listings."""
    first = text.splitlines()[0] if text else ""
    if len(first) > width:
        return first[: width - 3] + "..."
    return first


@cli.command("create")
@click.argument("text")
@output_options
def create_cmd(text: str, output_json: bool, quiet: bool) -> None:
    """Store TEXT as a new record."""
    is_json = output_json
    store = require_store(is_json)
    with store_errors(is_json):
        record = store.create(text)
    output_result(
        data=record,
        human_message=f"Created {record['id']}",
        quiet_value=record["id"],
        is_json=is_json,
        is_quiet=quiet,
    )


@cli.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
def list_cmd(output_json: bool) -> None:
    """List all records, ordered by id."""
    is_json = output_json
    store = require_store(is_json)
    with store_errors(is_json):
        records = store.read_all()

    if is_json:
        click.echo(json_envelope(True, data=records))
        return
    if not records:
        click.echo("No records.")
        return
    for record in records:
        click.echo(f"{record['id']}  {_preview(record['text'])}")


@cli.command("show")
@click.argument("record_id")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
def show_cmd(record_id: str, output_json: bool) -> None:
    """Print the full text of RECORD_ID."""
    is_json = output_json
    store = require_store(is_json)
    with store_errors(is_json):
        record = store.read_one(record_id)
    output_result(
        data=record,
        human_message=record["text"],
        quiet_value=record["text"],
        is_json=is_json,
        is_quiet=False,
    )


@cli.command("update")
@click.argument("record_id")
@click.argument("text")
@output_options
def update_cmd(record_id: str, text: str, output_json: bool, quiet: bool) -> None:
    """Replace the text of RECORD_ID."""
    is_json = output_json
    store = require_store(is_json)
    with store_errors(is_json):
        record = store.update(record_id, text)
    output_result(
        data=record,
        human_message=f"Updated {record['id']}",
        quiet_value=record["id"],
        is_json=is_json,
        is_quiet=quiet,
    )


@cli.command("delete")
@click.argument("record_id")
@output_options
def delete_cmd(record_id: str, output_json: bool, quiet: bool) -> None:
    """Remove RECORD_ID."""
    is_json = output_json
    store = require_store(is_json)
    with store_errors(is_json):
        store.delete(record_id)
    output_result(
        data={"id": record_id},
        human_message=f"Deleted {record_id}",
        quiet_value=record_id,
        is_json=is_json,
        is_quiet=quiet,
    )


@cli.command("next-id")
@output_options
@click.option("--peek", is_flag=True, help="Show the last issued id without consuming one.")
def next_id_cmd(output_json: bool, quiet: bool, peek: bool) -> None:
    """Issue (or with --peek, show) an id from the counter."""
    is_json = output_json
    config = require_config(is_json)
    sequence = SequenceGenerator(config["counter_file"])
    with store_errors(is_json):
        if peek:
            value = sequence.current_value()
            output_result(
                data={"last_issued": value},
                human_message=f"Last issued: {value}",
                quiet_value=str(value),
                is_json=is_json,
                is_quiet=quiet,
            )
            return
        new_id = sequence.next_id()
    output_result(
        data={"id": new_id},
        human_message=f"Issued {new_id}",
        quiet_value=new_id,
        is_json=is_json,
        is_quiet=quiet,
    )
