"""CLI: cotproto parse|detail|type|normalize"""

import json
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cot_proto.codec.detail import parse
from cot_proto.codec.envelope import encode
from cot_proto.codec.tokenizer import read_event_type
from cot_proto.errors import CotError
from cot_proto.models.timestamp import format_timestamp

console = Console()


def _wants_json(json_output: bool) -> bool:
    from cot_proto.cli.main import _wants_json
    return _wants_json(json_output)


def _fail(err: CotError) -> NoReturn:
    from cot_proto.cli.main import _fail
    _fail(err)


@click.command("parse")
@click.argument("source", type=click.File("r"))
@click.option("--json-output", "--json", is_flag=True)
def parse_cmd(source, json_output):
    """Show envelope fields and raw detail fragments."""
    try:
        cot = parse(source.read())
    except CotError as e:
        _fail(e)
    if _wants_json(json_output):
        click.echo(json.dumps(cot.model_dump(mode="json"), indent=2))
        return
    table = Table(title=f"Event {escape(cot.uid)}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("version", escape(cot.version))
    table.add_row("type", escape(cot.type))
    table.add_row("how", escape(cot.how or "-"))
    table.add_row("time", format_timestamp(cot.time))
    table.add_row("start", format_timestamp(cot.start))
    table.add_row("stale", format_timestamp(cot.stale))
    p = cot.point
    table.add_row("point", f"lat={p.lat} lon={p.lon} hae={p.hae} ce={p.ce} le={p.le}")
    console.print(table)
    console.print(f"[dim]{len(cot.detail)} detail fragment(s)[/dim]")
    for fragment in cot.detail:
        console.print(escape(fragment), highlight=False, soft_wrap=True)


@click.command("detail")
@click.argument("source", type=click.File("r"))
def detail_cmd(source):
    """Print raw detail fragments, one per line."""
    try:
        cot = parse(source.read())
    except CotError as e:
        _fail(e)
    for fragment in cot.detail:
        click.echo(fragment)


@click.command("type")
@click.argument("source", type=click.File("r"))
def type_cmd(source):
    """Print the event type code."""
    try:
        click.echo(read_event_type(source.read()))
    except CotError as e:
        _fail(e)


@click.command("normalize")
@click.argument("source", type=click.File("r"))
def normalize_cmd(source):
    """Parse and re-encode with UTC millisecond timestamps."""
    try:
        click.echo(encode(parse(source.read())))
    except CotError as e:
        _fail(e)
