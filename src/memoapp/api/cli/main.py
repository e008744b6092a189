"""memoapp CLI entry point.

Each invocation runs exactly one command: load configuration, initialize the
store, perform the operation, print the result and exit.

Exit codes:
- 0: success, help (also shown for an unknown command), or a memo ID that
  does not exist
- 1: missing or malformed argument, storage failure, or bad configuration
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, NoReturn, Optional, TypeVar

import click
import structlog
import typer
from typer.core import TyperGroup

from memoapp.api.cli.output_formatter import MemoConsole
from memoapp.application.config_loader import ConfigLoader, apply_overrides
from memoapp.application.memo_service import MemoService, create_memo_service
from memoapp.core.domain.errors import MemoAppError
from memoapp.core.domain.memo import SortOrder, parse_tags

T = TypeVar("T")


class MemoGroup(TyperGroup):
    """Command group that keeps every exit code at 0 or 1.

    An unknown verb shows the usage guide. Other command line mistakes
    (option without a value, invalid choice) exit with 1 instead of 2.
    """

    def resolve_command(self, ctx: click.Context, args: list[str]):
        name = args[0]
        if not name.startswith("-") and self.get_command(ctx, name) is None:
            return "help", self.get_command(ctx, "help"), []
        return super().resolve_command(ctx, args)

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


app = typer.Typer(
    name="memoapp",
    cls=MemoGroup,
    help="memoapp - command line memo notebook",
    add_completion=False,
    rich_markup_mode="rich",
)

console = MemoConsole()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", help="Directory holding the memo document"
    ),
    file_name: Optional[str] = typer.Option(
        None, "--file-name", help="Memo document file name"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """memoapp - command line memo notebook."""
    # Store global options in context for subcommands
    ctx.obj = {
        "data_dir": data_dir,
        "file_name": file_name,
        "config": config,
        "debug": debug,
    }
    if ctx.invoked_subcommand is None:
        console.print_usage()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _build_service(ctx: typer.Context) -> MemoService:
    opts = ctx.obj or {}
    debug = bool(opts.get("debug"))
    # Configure before loading so the loader's own events are filtered too
    _configure_logging("DEBUG" if debug else "WARNING")

    app_config = ConfigLoader().load(opts.get("config"))
    app_config = apply_overrides(
        app_config,
        data_dir=opts.get("data_dir"),
        file_name=opts.get("file_name"),
    )
    if not debug:
        _configure_logging(app_config.logging.level)
    return create_memo_service(app_config)


def _run(ctx: typer.Context, operation: Callable[[MemoService], Awaitable[T]]) -> T:
    """Build the service, initialize storage and run one operation.

    Any MemoAppError is reported on stderr and turned into exit code 1.
    """

    async def _execute() -> T:
        service = _build_service(ctx)
        await service.init()
        return await operation(service)

    try:
        return asyncio.run(_execute())
    except MemoAppError as exc:
        console.print_error(exc.message)
        raise typer.Exit(1) from exc


def _usage_error(message: str, usage: str) -> NoReturn:
    console.print_error(message, usage=usage)
    raise typer.Exit(1)


@app.command("add")
def add_memo(
    ctx: typer.Context,
    title: Optional[str] = typer.Argument(None, help="Memo title"),
    content: Optional[str] = typer.Argument(None, help="Memo content"),
    tags: Optional[str] = typer.Argument(None, help="Comma-separated tags"),
):
    """Add a new memo."""
    if not title or not content:
        _usage_error("Title and content are required.", "memoapp add <title> <content> [tags]")

    memo = _run(ctx, lambda service: service.add_memo(title, content, parse_tags(tags)))
    console.print_success(f"Memo created with ID: {memo.id}")


@app.command("list")
def list_memos(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only memos with this tag"),
    order: SortOrder = typer.Option(
        SortOrder.DESC, "--order", case_sensitive=False, help="Sort by creation date"
    ),
):
    """List all memos, newest first."""
    memos = _run(ctx, lambda service: service.list_memos(tag=tag, order=order))

    if not memos:
        console.print_info("No memos found.")
        return

    console.print_memo_list(memos, heading=f"Found {len(memos)} memo(s):")


@app.command("show")
def show_memo(
    ctx: typer.Context,
    memo_id: Optional[str] = typer.Argument(None, metavar="ID", help="Memo ID"),
):
    """Show a specific memo."""
    if not memo_id:
        _usage_error("Memo ID is required.", "memoapp show <id>")

    memo = _run(ctx, lambda service: service.get_memo(memo_id))
    if memo is None:
        console.print_info(f'Memo with ID "{memo_id}" not found.')
        return

    console.print_memo_detail(memo)


@app.command("update")
def update_memo(
    ctx: typer.Context,
    memo_id: Optional[str] = typer.Argument(None, metavar="ID", help="Memo ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", help="New content"),
    tags: Optional[str] = typer.Option(None, "--tags", help="New comma-separated tags"),
):
    """Update a memo. Only the given fields change."""
    if not memo_id:
        _usage_error(
            "Memo ID is required.",
            "memoapp update <id> [--title <title>] [--content <content>] [--tags <tags>]",
        )

    new_tags = parse_tags(tags) if tags is not None else None
    memo = _run(
        ctx,
        lambda service: service.update_memo(
            memo_id, title=title, content=content, tags=new_tags
        ),
    )
    if memo is None:
        console.print_info(f'Memo with ID "{memo_id}" not found.')
        return

    console.print_success(f'Memo "{memo.title}" updated successfully.')


@app.command("delete")
def delete_memo(
    ctx: typer.Context,
    memo_id: Optional[str] = typer.Argument(None, metavar="ID", help="Memo ID"),
):
    """Delete a memo."""
    if not memo_id:
        _usage_error("Memo ID is required.", "memoapp delete <id>")

    memo = _run(ctx, lambda service: service.delete_memo(memo_id))
    if memo is None:
        console.print_info(f'Memo with ID "{memo_id}" not found.')
        return

    console.print_success(f'Memo "{memo.title}" deleted successfully.')


@app.command("search")
def search_memos(
    ctx: typer.Context,
    keyword: Optional[str] = typer.Argument(None, help="Text to look for"),
):
    """Search memos by keyword (title, content or tags)."""
    if not keyword:
        _usage_error("Search keyword is required.", "memoapp search <keyword>")

    memos = _run(ctx, lambda service: service.search_memos(keyword))
    if not memos:
        console.print_info(f'No memos found matching "{keyword}".')
        return

    console.print_memo_list(
        memos,
        heading=f'Found {len(memos)} memo(s) matching "{keyword}":',
        show_tags=False,
    )


@app.command("help")
def show_help():
    """Show the command overview."""
    console.print_usage()


@app.command()
def version():
    """Show memoapp version."""
    from memoapp import __version__

    console.print_info(f"memoapp {__version__}")


if __name__ == "__main__":
    app()
