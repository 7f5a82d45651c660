"""
Rich formatter module for the Life Planner dashboard.

Turns classifications into human-readable labels and renders the derived
dashboard data as Rich panels. Labels are English with US-style clock
times ("Due today at 3:30 PM").
"""

from datetime import date, datetime, timedelta
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from planner_engine.core.config import Config
from planner_engine.core.dates import InvalidDateError, local_date, localize, to_datetime
from planner_engine.core.models import Task
from planner_engine.dashboard.aggregator import (
    CategorySummary,
    DailyStats,
    DashboardData,
)
from planner_engine.dashboard.classifier import DateStatus, classify_date
from planner_engine.dashboard.inventory import SupplementForecast, SupplyTier
from planner_engine.dashboard.sorting import TimelineItem

INVALID_DATE_LABEL = "Invalid date"

TIER_LABELS = {
    SupplyTier.CRITICAL: "Buy Now!",
    SupplyTier.WARNING: "Low Stock",
    SupplyTier.LOW: "Running Low",
    SupplyTier.GOOD: "Well Stocked",
    SupplyTier.NO_DATA: "No data",
}

TIER_STYLES = {
    SupplyTier.CRITICAL: "red bold",
    SupplyTier.WARNING: "yellow",
    SupplyTier.LOW: "cyan",
    SupplyTier.GOOD: "green",
    SupplyTier.NO_DATA: "dim",
}

# Status icons for tasks
STATUS_ICONS = {
    "pending": "[dim]○[/dim]",
    "in_progress": "[yellow]◐[/yellow]",
    "completed": "[green]✓[/green]",
}

PRIORITY_COLORS = {
    "high": "red bold",
    "medium": "yellow",
    "low": "dim",
}


def _month_day(dt: datetime) -> str:
    """MMM d, e.g. 'Mar 5'."""
    return f"{dt.strftime('%b')} {dt.day}"


def _clock(dt: datetime) -> str:
    """h:mm a, e.g. '9:05 AM'."""
    return dt.strftime("%I:%M %p").lstrip("0")


def format_due_label(due: Any, now: datetime) -> str:
    """
    Describe a due date relative to now.

    Args:
        due: Due timestamp (datetime or ISO string), or None
        now: Reference instant

    Returns:
        "Overdue (MMM d)", "Due today at h:mm a", "Due MMM d",
        "No due date" or "Invalid date"
    """
    status = classify_date(due, now)
    if status is DateStatus.NO_DATE:
        return "No due date"
    if status is DateStatus.INVALID_DATE:
        return INVALID_DATE_LABEL

    moment = localize(to_datetime(due), now)
    if status is DateStatus.OVERDUE:
        return f"Overdue ({_month_day(moment)})"
    if status is DateStatus.DUE_SOON:
        return f"Due today at {_clock(moment)}"
    return f"Due {_month_day(moment)}"


def _week_start(day: date, first_day_of_week: str) -> date:
    offset = day.weekday() if first_day_of_week == "monday" else (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def format_relative_datetime(
    value: Any,
    now: datetime,
    first_day_of_week: str = "monday"
) -> str:
    """
    Describe when something happens, relative to today.

    Args:
        value: Timestamp (datetime or ISO string)
        now: Reference instant, its calendar day is today
        first_day_of_week: 'monday' or 'sunday'

    Returns:
        "Today, h:mm a", "Tomorrow, h:mm a", "<Weekday>, h:mm a" within the
        current week, otherwise "MMM d, h:mm a"
    """
    try:
        moment = to_datetime(value)
    except InvalidDateError:
        return INVALID_DATE_LABEL
    if moment is None:
        return INVALID_DATE_LABEL

    moment = localize(moment, now)
    day = local_date(moment, now)
    today = now.date()

    if day == today:
        return f"Today, {_clock(moment)}"
    if day == today + timedelta(days=1):
        return f"Tomorrow, {_clock(moment)}"
    if _week_start(day, first_day_of_week) == _week_start(today, first_day_of_week):
        return f"{moment.strftime('%A')}, {_clock(moment)}"
    return f"{_month_day(moment)}, {_clock(moment)}"


def tier_label(tier: SupplyTier) -> str:
    return TIER_LABELS[tier]


class DashboardFormatter:
    """
    Rich-based formatter for the derived dashboard data.

    Creates terminal panels and tables from DashboardData.
    """

    def __init__(self, console: Optional[Console] = None, config: Optional[Config] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
            config: Configuration (creates default if not provided)
        """
        self.console = console or Console()
        self.config = config if config else Config()
        self.first_day_of_week = self.config.get("first_day_of_week", "settings", "monday")

    def _format_priority(self, priority: Optional[str]) -> str:
        """Format priority as colored badge."""
        if priority not in PRIORITY_COLORS:
            return "[dim]---[/dim]"
        color = PRIORITY_COLORS[priority]
        return f"[{color}]{priority}[/{color}]"

    def _truncate(self, title: str, width: int) -> str:
        return title[:width] + "..." if len(title) > width else title

    def format_header(self, data: DashboardData) -> Panel:
        """Create header panel with date, greeting and streaks."""
        content = Text()
        content.append(f"{data.greeting}!\n", style="bold")
        content.append(data.date.strftime("%A, %B %d, %Y"), style="dim")
        content.append(
            f"\nStreak: {data.completion_streak} day"
            f"{'s' if data.completion_streak != 1 else ''}"
            f"  •  Diary: {data.diary_streak} day streak",
            style="cyan",
        )

        return Panel(
            content,
            title="[bold]Today[/bold]",
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_task_list(
        self,
        tasks: List[Task],
        title: str,
        now: datetime,
        max_items: int = 7,
        border_style: str = "white"
    ) -> Optional[Panel]:
        """
        Create panel with task list.

        Args:
            tasks: List of tasks to display
            title: Panel title
            now: Reference instant for the due labels
            max_items: Maximum items to show
            border_style: Panel border style

        Returns:
            Rich Panel or None if no tasks
        """
        if not tasks:
            return None

        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("Icon", width=2)
        table.add_column("Title", ratio=1)
        table.add_column("Due", width=22, justify="right")
        table.add_column("Priority", width=8, justify="right")

        for task in tasks[:max_items]:
            table.add_row(
                STATUS_ICONS.get(task.status, "○"),
                self._truncate(task.title, 40),
                format_due_label(task.due_date, now),
                self._format_priority(task.priority),
            )

        if len(tasks) > max_items:
            table.add_row("", f"[dim]+ {len(tasks) - max_items} more...[/dim]", "", "")

        return Panel(
            table,
            title=f"[bold]{title} ({len(tasks)})[/bold]",
            border_style=border_style,
            padding=(0, 1),
        )

    def format_timeline(
        self,
        items: List[TimelineItem],
        title: str,
        now: datetime
    ) -> Panel:
        """Create panel listing tasks and events in time order."""
        if not items:
            return Panel(
                Text("Nothing scheduled", justify="center", style="dim"),
                title=f"[bold]{title}[/bold]",
                border_style="cyan",
                padding=(0, 1),
            )

        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("When", width=22, no_wrap=True)
        table.add_column("Kind", width=6)
        table.add_column("Title", ratio=1)

        for item in items:
            when = (
                format_relative_datetime(item.when, now, self.first_day_of_week)
                if item.when is not None
                else "[dim]---[/dim]"
            )
            table.add_row(f"[cyan]{when}[/cyan]", f"[dim]{item.kind}[/dim]", self._truncate(item.title, 40))

        return Panel(
            table,
            title=f"[bold]{title}[/bold]",
            border_style="cyan",
            padding=(0, 1),
        )

    def format_categories(self, categories: List[CategorySummary]) -> Optional[Panel]:
        """Create panel with per-category progress."""
        if not categories:
            return None

        table = Table(box=None, padding=(0, 1), expand=True)
        table.add_column("Category", ratio=1)
        table.add_column("Total", justify="right")
        table.add_column("Pending", justify="right")
        table.add_column("Done", justify="right")

        for summary in categories:
            table.add_row(
                summary.name,
                str(summary.total),
                str(summary.pending),
                f"{summary.completed} [dim]({summary.completion_ratio:.0%})[/dim]",
            )

        return Panel(table, title="[bold]Tasks by Category[/bold]", border_style="magenta", padding=(0, 1))

    def format_supplements(self, forecasts: List[SupplementForecast]) -> Optional[Panel]:
        """Create panel with supplement run-out forecasts."""
        if not forecasts:
            return None

        table = Table(box=None, padding=(0, 1), expand=True)
        table.add_column("Supplement", ratio=1)
        table.add_column("Left", justify="right")
        table.add_column("Runs out", justify="right")
        table.add_column("Supply", justify="right")
        table.add_column("Status", justify="right")

        for item in forecasts:
            forecast = item.forecast
            style = TIER_STYLES[forecast.tier]
            if forecast.days_left is None:
                left = "[dim]---[/dim]"
                runs_out = "[dim]---[/dim]"
            else:
                left = f"{forecast.days_left} day{'s' if forecast.days_left != 1 else ''}"
                runs_out = (
                    _month_day(forecast.run_out_date)
                    if forecast.run_out_date is not None
                    else "[dim]---[/dim]"
                )
            fraction = item.remaining_fraction
            supply = f"{fraction:.0%}" if fraction is not None else "[dim]---[/dim]"
            table.add_row(
                item.supplement.name,
                left,
                runs_out,
                supply,
                f"[{style}]{tier_label(forecast.tier)}[/{style}]",
            )

        return Panel(table, title="[bold]Supplements[/bold]", border_style="green", padding=(0, 1))

    def format_stats_bar(self, stats: DailyStats) -> str:
        """
        Create bottom stats bar.

        Args:
            stats: Daily statistics

        Returns:
            Formatted stats string
        """
        parts = [
            f"[green]✓ {stats.tasks_completed_today} done[/green]",
            f"[white]○ {stats.tasks_remaining} remaining[/white]",
        ]

        if stats.tasks_overdue > 0:
            parts.append(f"[red]⚠ {stats.tasks_overdue} overdue[/red]")

        if stats.completion_rate > 0:
            parts.append(f"[dim]{stats.completion_rate:.0f}% done[/dim]")

        return " │ ".join(parts)

    def render_dashboard(self, data: DashboardData, verbose: bool = False) -> None:
        """
        Render the complete dashboard to console.

        Args:
            data: Complete dashboard data
            verbose: Also show priority and category breakdowns
        """
        now = data.generated_at
        panels = [
            self.format_header(data),
            self.format_task_list(
                data.buckets.overdue, "⚠ Overdue", now, max_items=5, border_style="red"
            ),
            self.format_timeline(data.today, "Today", now),
            self.format_timeline(data.upcoming, "Upcoming", now),
            self.format_supplements(data.supplements),
        ]

        if verbose:
            panels += [
                self.format_task_list(data.buckets.high, "High Priority", now),
                self.format_task_list(data.buckets.in_progress, "In Progress", now),
                self.format_categories(data.categories),
            ]

        for panel in panels:
            if panel is not None:
                self.console.print(panel)
                self.console.print()

        self.console.print("─" * 60)
        self.console.print(self.format_stats_bar(data.stats), justify="center")
        self.console.print("─" * 60)
