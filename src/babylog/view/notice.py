# SPDX-License-Identifier: MIT

from rich.console import Console

from babylog.color import ERROR_COLOR, SUCCESS_COLOR
from babylog.model.event import Event, Notice, NoticeLevel

console = Console()


def notice_view(notice: Notice) -> None:
    color = SUCCESS_COLOR if notice.level == NoticeLevel.SUCCESS else ERROR_COLOR
    title = f"[bold]{notice.title}:[/bold] " if notice.title else ""
    console.print(f"[{color}]{title}{notice.message}[/{color}]")


def print_notices(event: Event) -> None:
    """Notifier listener that prints notices as they are emitted."""
    if isinstance(event, Notice):
        notice_view(event)
