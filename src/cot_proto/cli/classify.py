"""CLI: cotproto classify"""

import json
from typing import NoReturn

import click
from rich.console import Console

from cot_proto.classify import detect_tak_cot_type
from cot_proto.errors import CotError
from cot_proto.models.classification import TakCotType

console = Console()


def _wants_json(json_output: bool) -> bool:
    from cot_proto.cli.main import _wants_json
    return _wants_json(json_output)


def _fail(err: CotError) -> NoReturn:
    from cot_proto.cli.main import _fail
    _fail(err)


@click.command("classify")
@click.argument("source", type=click.File("r"))
@click.option("--json-output", "--json", is_flag=True)
def classify_cmd(source, json_output):
    """Guess the TAK message type (best effort)."""
    try:
        result = detect_tak_cot_type(source.read())
    except CotError as e:
        _fail(e)
    if _wants_json(json_output):
        click.echo(json.dumps({
            "uid": result.cot_msg.uid,
            "type": result.cot_msg.type,
            "category": result.cot_type.value,
        }, indent=2))
        return
    style = "yellow" if result.cot_type is TakCotType.OTHER else "green"
    console.print(f"[{style}]{result.cot_type.value}[/{style}]", highlight=False)
