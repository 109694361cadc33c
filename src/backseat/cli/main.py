#!/usr/bin/env python3
"""
BACKSEAT CLI - Transcript Replay
--------------------------------
Command-line front end for the annotation engine. Without a live chat
connection, a saved transcript stands in for the transport: each line is
streamed into a chat log buffer exactly as a client would insert it.

    backseat parse "<alice> !line 5 use a hashmap here"
    backseat replay main.py chat.log --visit 5

Author: Backseat Team
Date: 2026-10-19
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Rich library components for high-fidelity terminal UI
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from backseat.annotation.parser import CommandParser
from backseat.cli.formatter import BackseatFormatter
from backseat.config import LOG_LEVELS, BackseatConfig, load_config
from backseat.core.engine import AnnotationBridge
from backseat.core.errors import ConfigError, OutOfRangeLine
from backseat.surface.buffer import TextBuffer

# Global console for consistent styling across the application
console = Console()

VERSION = "0.1.0"


class BackseatCLI:
    """
    CLI wrapper that translates user commands into bridge actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="backseat",
            description="Backseat - Live chat annotations for the lines of a document",
            formatter_class=argparse.RawDescriptionHelpFormatter
        )
        self.formatter = BackseatFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"backseat v{VERSION}")
        self.parser.add_argument("--config", help="YAML configuration file")
        self.parser.add_argument("--log-level", choices=LOG_LEVELS, help="Override the configured log level")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'parse' subcommand - check a single chat line
        parse_parser = subparsers.add_parser("parse", help="Parse one chat line as a !line command")
        parse_parser.add_argument("text", help="Raw chat line, e.g. '<alice> !line 5 nice'")

        # 'replay' subcommand - stream a transcript against a document
        replay_parser = subparsers.add_parser("replay", help="Replay a chat transcript against a document")
        replay_parser.add_argument("document", help="Text file to annotate")
        replay_parser.add_argument("transcript", help="Chat transcript, one message per line")
        replay_parser.add_argument("--visit", type=int, action="append", default=[],
                                   metavar="LINE", help="Move the cursor to LINE and show its comments")
        replay_parser.add_argument("--quiet", action="store_true", help="Skip printing the document")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]Backseat v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _load_config(self, args: argparse.Namespace) -> BackseatConfig:
        config = load_config(args.config)
        if args.log_level:
            config.log_level = args.log_level
        logging.basicConfig(level=getattr(logging, config.log_level))
        return config

    def _run_parse(self, args: argparse.Namespace, config: BackseatConfig) -> int:
        command = CommandParser(stamp_length=config.suffix_length).parse(args.text)
        if command is None:
            console.print("[yellow]Not a !line command.[/yellow]")
            return 1
        self.formatter.show_command(command)
        return 0

    def _run_replay(self, args: argparse.Namespace, config: BackseatConfig) -> int:
        document_path = Path(args.document)
        transcript_path = Path(args.transcript)
        for path in (document_path, transcript_path):
            if not path.is_file():
                console.print(f"[bold red]Error:[/bold red] Path '{escape(str(path))}' not found.")
                return 1

        document = TextBuffer(document_path.name, document_path.read_text(encoding='utf-8-sig'))
        chat_log = TextBuffer(transcript_path.name)
        bridge = AnnotationBridge(config)
        context = bridge.attach(document, chat_log=chat_log)

        messages = transcript_path.read_text(encoding='utf-8-sig').splitlines()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            console=console,
            transient=True
        ) as progress:
            task_id = progress.add_task("Replaying chat...", total=len(messages))
            for message in messages:
                chat_log.insert(message + "\n")
                progress.update(task_id, advance=1)

        if not args.quiet:
            self.formatter.render_document(document, context)
        self.formatter.print_annotation_table(context)

        for line in args.visit:
            self._visit(document, context, line)

        bridge.detach()
        return 0

    def _visit(self, document: TextBuffer, context, line: int):
        seen = len(document.messages)
        try:
            document.goto_line(line)
        except OutOfRangeLine as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return

        if len(document.messages) > seen:
            self.formatter.show_reveal(line, document.messages[-1])
        elif line in context.store:
            # Cursor was already on this line, so no entry transition fired
            self.formatter.show_reveal(line, context.reveal.format(context.store.get(line)))
        else:
            console.print(f"[dim]No annotations on line {line}.[/dim]")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        if args.command is None:
            self.print_header("Live Line Annotations")
            self.parser.print_help()
            return 0

        try:
            config = self._load_config(args)
        except ConfigError as e:
            console.print(f"[bold red]Config error:[/bold red] {escape(str(e))}")
            return 2

        if args.command == "parse":
            return self._run_parse(args, config)
        self.print_header("Chat Replay")
        return self._run_replay(args, config)


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(BackseatCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
