"""
cot-proto CLI — `cotproto` command.

Commands:
  cotproto parse <file>       Envelope fields and raw detail fragments
  cotproto detail <file>      Raw detail fragments, one per line
  cotproto classify <file>    Guess the TAK message type
  cotproto type <file>        Event type code only
  cotproto normalize <file>   Parse and re-encode

<file> may be `-` for stdin.
"""

import json
import logging
import os
from pathlib import Path
from typing import NoReturn, Optional

try:
    import click
    from rich.console import Console
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install cot-proto[cli]")

from cot_proto.errors import CotError

console = Console()
CONFIG_FILE = Path(os.environ.get("COT_PROTO_CONFIG", Path.home() / ".cot_proto" / "config.json"))
DEFAULT_CONFIG = {"output": "table", "log_level": "WARNING"}


def _load_config() -> dict:
    try:
        cfg = json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return dict(DEFAULT_CONFIG)
    return {**DEFAULT_CONFIG, **cfg}


def _wants_json(json_output: bool) -> bool:
    return json_output or _load_config().get("output") == "json"


def _fail(err: CotError) -> NoReturn:
    console.print(f"[red]{err.code}: {escape(str(err))}[/red]", highlight=False)
    raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]))
def main(log_level: Optional[str]):
    """cot-proto CLI — inspect Cursor on Target messages."""
    level = log_level or _load_config().get("log_level", "WARNING")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


# Register subcommands from separate modules
from cot_proto.cli.messages import detail_cmd, normalize_cmd, parse_cmd, type_cmd
from cot_proto.cli.classify import classify_cmd

main.add_command(parse_cmd)
main.add_command(detail_cmd)
main.add_command(type_cmd)
main.add_command(normalize_cmd)
main.add_command(classify_cmd)


if __name__ == "__main__":
    main()
