#!filepath: tracktime/cli.py
import subprocess
from typing import List, Optional

import typer
from rich import print, print_json
from rich.table import Table

from tracktime import __version__, init_logging, logs
from tracktime.config.app_config import AppConfig
from tracktime.observability.duration import parse
from tracktime.observability.stopwatch import Stopwatch

app = typer.Typer(help="TrackTime stopwatch CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command(
    "exec",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def exec_(
    command: List[str] = typer.Argument(..., help="Command to run, e.g. tracktime exec -- sleep 1"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config path"),
    as_json: bool = typer.Option(False, "--json", help="Print the duration record as JSON"),
):
    """
    在 Stopwatch 计时器下运行命令，打印耗时并透传退出码
    """
    cfg = AppConfig.load(path=config)
    init_logging(cfg.log)
    stopwatch = Stopwatch.from_config(cfg.stopwatch)
    name = " ".join(command)

    stopwatch.start(name)
    try:
        completed = _run(command)
    except FileNotFoundError:
        stopwatch.remove(name)
        print(f"[red]command not found: {command[0]}[/red]")
        raise typer.Exit(code=127)

    result = stopwatch.stop(name)
    logs.info(f"[CLI] {name} exit={completed.returncode} total={result.display_total or '0ns'}")

    if as_json:
        print_json(data={**result.as_dict(), "exit": completed.returncode})
    else:
        table = Table(title=stopwatch.name)
        table.add_column("command")
        table.add_column("elapsed")
        table.add_column("total")
        table.add_column("ms")
        table.add_column("exit")
        table.add_row(
            name,
            result.display or "0ns",
            result.display_total or "0ns",
            result.display_ms,
            str(completed.returncode),
        )
        print(table)

    raise typer.Exit(code=completed.returncode)


@logs.catch(msg="command failed to start")
def _run(command: List[str]) -> subprocess.CompletedProcess:
    return subprocess.run(command)


@app.command("parse")
def parse_(nanoseconds: int):
    """
    纳秒 → seconds / milliseconds / nanoseconds
    """
    parts = parse(nanoseconds)
    print(
        f"[blue]{nanoseconds}ns[/blue] = "
        f"{parts.seconds}s {parts.milliseconds}ms {parts.nanoseconds}ns"
    )


if __name__ == "__main__":
    app()
