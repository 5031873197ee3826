"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from todolist_service.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml", "quiet")


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}
    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            if not any(tid != task_id and tid.endswith(suffix) for tid in task_ids):
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)
    return result


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_pretty(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, dict) and "items" in data:
        data = data["items"]

    if isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list) and data and isinstance(data[0], dict):
        format_dict_table(data)
    elif isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
        for item in data:
            console.print(item)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in item.items():
        if isinstance(value, dict):
            value = json.dumps(value, default=str)
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_quiet(data: Any) -> None:
    """Print only ids (or bare values), one per line."""
    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        print(data)
        return
    for item in data:
        print(item.get("id", "") if isinstance(item, dict) else item)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    4: "🔴",  # URGENT
    3: "🟠",  # HIGH
    2: "🟡",  # MEDIUM
    1: "🟢",  # LOW
    0: "⚪",  # NORMAL
}

PRIORITY_NAMES = {
    4: "URGENT",
    3: "HIGH PRIORITY",
    2: "MEDIUM PRIORITY",
    1: "LOW PRIORITY",
    0: "NORMAL",
}

PRIORITY_COLORS = {
    4: "bold red",
    3: "bold orange3",
    2: "bold yellow",
    1: "green",
    0: "white",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "deleted": "🗑️",
}


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if isinstance(data, dict) and "items" in data:
        format_page_pretty(data)
    elif isinstance(data, dict) and "total_count" in data and "priority_stats" in data:
        format_statistics_pretty(data)
    elif isinstance(data, list) and data and isinstance(data[0], dict):
        format_tasks_pretty(data)
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
        for item in data:
            console.print(f"• {item}")
    else:
        console.print(data)


def format_page_pretty(page: dict) -> None:
    """Format a paged result: tasks plus a page footer."""
    format_tasks_pretty(page["items"])
    footer = (
        f"Page {page['current_page']}/{max(page['total_pages'], 1)}"
        f" · {page['total_count']} tasks"
    )
    if page.get("has_next_page"):
        footer += " · more with --page"
    console.print(footer, style="dim")


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks grouped by priority, most urgent first."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    pending = [t for t in tasks if not t.get("is_completed")]
    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(pending)} pending, {len(tasks) - len(pending)} completed)", style="dim")
    console.print(header)
    console.print()

    suffix_map = calculate_unique_suffixes([t["id"] for t in tasks])

    by_priority: dict[int, list[dict]] = {}
    for task in tasks:
        by_priority.setdefault(task.get("priority", 0), []).append(task)

    for priority in sorted(by_priority, reverse=True):
        console.print(
            f"{PRIORITY_ICONS[priority]} {PRIORITY_NAMES[priority]}",
            style=PRIORITY_COLORS[priority],
        )
        for task in by_priority[priority]:
            format_task_item(task, indent="  ", suffix_map=suffix_map)
        console.print()


def format_task_item(
    task: dict, indent: str = "", suffix_map: dict[str, int] | None = None
) -> None:
    """Format a single task line."""
    if task.get("is_deleted"):
        status_icon = STATUS_ICONS["deleted"]
    elif task.get("is_completed"):
        status_icon = STATUS_ICONS["completed"]
    else:
        status_icon = STATUS_ICONS["open"]

    line = Text(f"{indent}{status_icon} ")
    line.append(task["title"], style="dim" if task.get("is_completed") else "")
    if task.get("category"):
        line.append(f" #{task['category']}", style="magenta")

    task_id = task["id"]
    length = (suffix_map or {}).get(task_id, len(task_id))
    line.append(f"  [{task_id[-length:]}]", style="dim cyan")
    console.print(line)

    if task.get("description"):
        console.print(f"{indent}   {task['description']}", style="dim")


def format_statistics_pretty(stats: dict) -> None:
    """Format the statistics summary."""
    console.print("📊 Statistics", style="bold cyan")
    console.print()

    summary = Table(show_header=False, box=None)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="white")
    summary.add_row("Active", str(stats["total_count"]))
    summary.add_row("Completed", str(stats["completed_count"]))
    summary.add_row("Pending", str(stats["pending_count"]))
    summary.add_row("In recycle bin", str(stats["deleted_count"]))
    summary.add_row("Completion rate", f"{stats['completion_rate']:.1f}%")
    summary.add_row(
        "This week",
        f"{stats['this_week_completed_count']}/{stats['this_week_count']} completed",
    )
    summary.add_row(
        "This month",
        f"{stats['this_month_completed_count']}/{stats['this_month_count']} completed",
    )
    summary.add_row("Completed per day (30d)", f"{stats['average_completion_per_day']:.2f}")
    summary.add_row(
        "Streak",
        f"{stats['current_completion_streak']} current"
        f" / {stats['longest_completion_streak']} longest",
    )
    console.print(summary)
    console.print()

    priorities = stats["priority_stats"]
    console.print("Priorities", style="bold")
    for level, name in enumerate(("normal", "low", "medium", "high", "urgent")):
        console.print(f"  {PRIORITY_ICONS[level]} {name:<7} {priorities[name]}")

    if stats["category_stats"]:
        console.print()
        table = Table(show_header=True, header_style="bold magenta")
        for col in ("Category", "Total", "Completed", "Pending", "Rate"):
            table.add_column(col)
        for cat in stats["category_stats"]:
            table.add_row(
                cat["category"],
                str(cat["total_count"]),
                str(cat["completed_count"]),
                str(cat["pending_count"]),
                f"{cat['completion_rate']:.1f}%",
            )
        console.print(table)
