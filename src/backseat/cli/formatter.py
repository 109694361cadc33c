# src/backseat/cli/formatter.py
from rich.console import Console
from rich.table import Table
from rich.text import Text

from backseat.annotation.context import AnnotationContext
from backseat.core.models import AnnotationCommand
from backseat.surface.base import EditingSurface

# Initialize the Rich console for high-quality terminal output
console = Console()


class BackseatFormatter:
    """
    Terminal rendering for the replay tool: the annotated document with its
    gutter, the per-line summary and revealed comments.
    """

    def __init__(self, out: Console = console):
        self.console = out

    def render_document(self, document: EditingSurface, context: AnnotationContext):
        """
        Prints the document with line numbers, drawing each live marker's
        glyph in the left margin.
        """
        gutter = {}
        for marker in document.markers():
            line = document.text.count('\n', 0, marker.start) + 1
            gutter[line] = marker.glyph

        lines = document.text.split('\n')
        width = len(str(len(lines)))
        for number, content in enumerate(lines, 1):
            row = Text()
            row.append(f"{gutter.get(number, ' ')} ", style="bold yellow")
            row.append(f"{number:>{width}} ", style="dim")
            row.append(content)
            self.console.print(row)

    def print_annotation_table(self, context: AnnotationContext):
        table = Table(title=f"Backseat Annotations: {context.document.name}",
                      show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right")
        table.add_column("Comments", justify="center")
        table.add_column("Latest", style="white")

        for line in context.store.lines():
            annotations = context.store.get(line)
            latest = next(iter(annotations))
            table.add_row(str(line), str(len(annotations)), Text(f"{latest.author} - {latest.text}"))

        self.console.print(table)

    def show_reveal(self, line: int, message: Text):
        self.console.print(Text.assemble((f"Line {line}: ", "bold cyan"), message))

    def show_command(self, command: AnnotationCommand):
        table = Table(show_header=False, box=None)
        table.add_column(style="bold cyan")
        table.add_column()
        table.add_row("Author", Text(command.author))
        table.add_row("Line", str(command.line))
        table.add_row("Comment", Text(command.comment))
        self.console.print(table)
