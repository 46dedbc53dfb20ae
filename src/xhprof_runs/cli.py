"""Command-line interface for browsing and pruning stored runs."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Confirm
from rich.syntax import Syntax
from rich.table import Table

from .config import RunStoreSettings
from .errors import CorruptPayloadError, RunStoreError
from .storage.file import FileRunStore


class CLIApplication:
    """Top-level command router."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.parser = argparse.ArgumentParser(
            prog="xhprof-runs",
            description="List, inspect and delete stored XHProf runs.",
        )
        self.parser.add_argument(
            "--dir",
            dest="output_dir",
            help="Run directory (default: XHPROF_OUTPUT_DIR or the system temp directory).",
        )
        self.parser.add_argument(
            "--suffix",
            help="Extension of run files (default: XHPROF_SUFFIX or 'xhprof').",
        )
        self.parser.add_argument(
            "--strict",
            action="store_true",
            default=None,
            help="Fail on write and sweep errors instead of only logging them.",
        )
        self.parser.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Diagnostic log level (default: WARNING).",
        )
        subparsers = self.parser.add_subparsers(dest="command", required=True)

        subparsers.add_parser("list", help="Show stored runs, newest first.")

        show = subparsers.add_parser("show", help="Print a run's payload.")
        show.add_argument("run_id")
        show.add_argument("--namespace", "-n", default="", help="Run namespace (source).")

        delete = subparsers.add_parser("delete", help="Delete one run.")
        delete.add_argument("run_id")
        delete.add_argument("--namespace", "-n", default="", help="Run namespace (source).")

        delete_all = subparsers.add_parser("delete-all", help="Delete every stored run.")
        delete_all.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation.")

    def run(self, argv: Sequence[str] | None = None) -> int:
        load_dotenv(Path.cwd() / ".env")
        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=args.log_level,
            format="%(message)s",
            handlers=[RichHandler(console=self.console, show_path=False)],
        )
        try:
            store = build_store(args)
        except ValidationError as e:
            self.console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
            return 2

        command = _COMMANDS[args.command](self.console, store, args)
        try:
            return command.run()
        except RunStoreError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return 1


def build_store(args: argparse.Namespace) -> FileRunStore:
    return FileRunStore(
        output_dir=args.output_dir,
        suffix=args.suffix,
        strict=args.strict,
        settings=RunStoreSettings(),
    )


class ListCommand:
    """`xhprof-runs list`"""

    def __init__(self, console: Console, store: FileRunStore, args: argparse.Namespace) -> None:
        self.console = console
        self.store = store

    def run(self) -> int:
        runs = self.store.list_runs()
        if not runs:
            self.console.print(f"No runs found in {escape(str(self.store.root))}", style="yellow")
            return 0

        table = Table(title=f"Existing runs in {escape(str(self.store.root))}")
        table.add_column("Run ID", style="cyan")
        table.add_column("Namespace")
        table.add_column("Modified")
        table.add_column("Size", justify="right")
        for listing in runs:
            table.add_row(
                escape(listing.run_id),
                escape(listing.namespace),
                listing.modified_at.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
                f"{listing.size_bytes:,} bytes",
            )
        self.console.print(table)
        return 0


class ShowCommand:
    """`xhprof-runs show RUN_ID`"""

    def __init__(self, console: Console, store: FileRunStore, args: argparse.Namespace) -> None:
        self.console = console
        self.store = store
        self.run_id: str = args.run_id
        self.namespace: str = args.namespace

    def run(self) -> int:
        try:
            lookup = self.store.get_run(self.run_id, self.namespace)
        except CorruptPayloadError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return 1

        if not lookup.found:
            self.console.print(escape(lookup.description), style="bold red")
            return 1

        self.console.print(escape(lookup.description), style="bold")
        self.console.print(Syntax(json.dumps(lookup.payload, indent=2, ensure_ascii=False), "json"))
        return 0


class DeleteCommand:
    """`xhprof-runs delete RUN_ID`"""

    def __init__(self, console: Console, store: FileRunStore, args: argparse.Namespace) -> None:
        self.console = console
        self.store = store
        self.run_id: str = args.run_id
        self.namespace: str = args.namespace

    def run(self) -> int:
        if self.store.delete_run(self.run_id, self.namespace):
            self.console.print(f"Deleted run {escape(self.run_id)}", style="green")
            return 0
        self.console.print(f"No run {escape(self.run_id)} to delete", style="yellow")
        return 1


class DeleteAllCommand:
    """`xhprof-runs delete-all`"""

    def __init__(self, console: Console, store: FileRunStore, args: argparse.Namespace) -> None:
        self.console = console
        self.store = store
        self.assume_yes: bool = args.yes

    def run(self) -> int:
        if not self.assume_yes and not Confirm.ask(
            f"Delete all runs in {escape(str(self.store.root))}?", console=self.console
        ):
            self.console.print("Aborted", style="yellow")
            return 1
        removed = self.store.delete_all_runs()
        self.console.print(f"Deleted {removed} run(s)", style="green")
        return 0


_COMMANDS = {
    "list": ListCommand,
    "show": ShowCommand,
    "delete": DeleteCommand,
    "delete-all": DeleteAllCommand,
}


def main() -> None:
    raise SystemExit(CLIApplication().run())
