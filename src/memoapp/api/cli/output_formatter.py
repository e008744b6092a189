"""Rich output formatting for the memoapp CLI.

Every piece of user-provided text goes through ``escape`` so brackets in a
memo are printed as-is instead of being read as rich markup.
"""

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.theme import Theme

from memoapp.core.domain.memo import Memo

PREVIEW_LENGTH = 100

MEMOAPP_THEME = Theme(
    {
        "title": "bold cyan",
        "label": "bold",
        "error": "bold red",
        "warning": "bold yellow",
        "success": "bold green",
        "muted": "dim",
        "info": "white",
    }
)

USAGE_COMMANDS = [
    ("add <title> <content> [tags]", "Add a new memo"),
    ("list [--tag <tag>] [--order asc|desc]", "List all memos"),
    ("show <id>", "Show a specific memo"),
    ("update <id> [--title t] [--content c] [--tags a,b]", "Update a memo"),
    ("delete <id>", "Delete a memo"),
    ("search <keyword>", "Search memos by keyword"),
    ("version", "Show the version"),
    ("help", "Show this help message"),
]

USAGE_EXAMPLES = [
    'memoapp add "Meeting Notes" "Discuss project timeline" work,meeting',
    "memoapp list --tag work",
    "memoapp show memo_1234567890_abc123def",
    'memoapp search "timeline"',
    "memoapp delete memo_1234567890_abc123def",
]


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in local time."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_tags(tags: Sequence[str]) -> str:
    return ", ".join(tags) if tags else "None"


def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """First ``length`` characters of ``content``, with an ellipsis if cut."""
    if len(content) <= length:
        return content
    return content[:length] + "..."


class MemoConsole:
    """Console wrapper that knows how to render memos."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console(theme=MEMOAPP_THEME)
        self.err_console = err_console or Console(theme=MEMOAPP_THEME, stderr=True)

    def print_success(self, message: str) -> None:
        self.console.print(f"[success][OK][/success] {escape(message)}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[info]{escape(message)}[/info]")

    def print_error(self, message: str, usage: Optional[str] = None) -> None:
        """Print an error (and optional usage line) to standard error."""
        self.err_console.print(f"[error]Error:[/error] {escape(message)}")
        if usage:
            self.err_console.print(f"[muted]Usage: {escape(usage)}[/muted]")

    def print_memo_list(self, memos: Sequence[Memo], heading: str, show_tags: bool = True) -> None:
        """Numbered summary of each memo."""
        self.console.print()
        self.console.print(f"[label]{escape(heading)}[/label]")
        self.console.print()
        for index, memo in enumerate(memos, start=1):
            self.console.print(f"[title][{index}] {escape(memo.title)}[/title]")
            self.console.print(f"    ID: {escape(memo.id)}")
            self.console.print(f"    Created: {format_timestamp(memo.created_at)}")
            if show_tags:
                self.console.print(f"    Tags: {escape(format_tags(memo.tags))}")
            self.console.print(f"    Content: {escape(preview(memo.content))}")
            self.console.print()

    def print_memo_detail(self, memo: Memo) -> None:
        """Full memo in a panel."""
        body = "\n".join(
            [
                f"[label]Title:[/label] {escape(memo.title)}",
                f"[label]ID:[/label] {escape(memo.id)}",
                f"[label]Created:[/label] {format_timestamp(memo.created_at)}",
                f"[label]Updated:[/label] {format_timestamp(memo.updated_at)}",
                f"[label]Tags:[/label] {escape(format_tags(memo.tags))}",
                "",
                "[label]Content:[/label]",
                escape(memo.content),
            ]
        )
        self.console.print(
            Panel(
                body,
                title="[Memo Details]",
                title_align="left",
                border_style="cyan",
                padding=(0, 1),
            )
        )

    def print_usage(self) -> None:
        """Command overview with examples."""
        self.console.print("[title]memoapp[/title] - command line memo notebook")
        self.console.print()
        self.console.print("[label]Usage:[/label]")
        self.console.print(escape("  memoapp [OPTIONS] <command> [arguments]"))
        self.console.print()
        self.console.print("[label]Commands:[/label]")
        for command, description in USAGE_COMMANDS:
            self.console.print(f"  {escape(command)}")
            self.console.print(f"      {description}")
        self.console.print()
        self.console.print("[label]Options:[/label]")
        self.console.print("  --data-dir PATH     Directory holding the memo document")
        self.console.print("  --file-name NAME    Memo document file name")
        self.console.print("  --config, -c PATH   YAML configuration file")
        self.console.print("  --debug, -d         Enable debug logging")
        self.console.print()
        self.console.print("[label]Examples:[/label]")
        for example in USAGE_EXAMPLES:
            self.console.print(f"  {escape(example)}")
