"""
Greedy placement strategy.

Tasks are placed one at a time, highest priority first. Each task takes the
earliest day in the look-ahead window that still has room for it under all
three capacity rules; the reservation is committed before the next task is
considered, so later (lower-priority) tasks see the day as used.

Complexity: at most n + shapes * look_ahead_days capacity checks, where a
shape is a distinct (category, hours) pair; each check is an O(1) ledger
lookup. Nothing here iterates over already-placed tasks.

Running the same tasks through a freshly seeded ledger twice yields the same
dates: ordering is a stable sort on score and placement is first-fit.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from .context import SchedulingContext
from .dates import add_days, date_range, days_between
from .domain import Category, ScoredTask, SchedulingOptions, SlotResult, Task


logger = logging.getLogger(__name__)


def order_by_priority(scored_tasks: List[ScoredTask]) -> List[ScoredTask]:
    """Highest score first; equal scores keep their input order."""
    return sorted(scored_tasks, key=lambda s: s.priority_score, reverse=True)


def find_slot_for_task(
    scored: ScoredTask,
    context: SchedulingContext,
    options: SchedulingOptions,
    start: Optional[date] = None
) -> SlotResult:
    """
    Find the first day in the window where the task fits.

    The scan runs from ``start`` (default: today) to the end of the window.
    A slot that lands after the task's due date is still taken, but it
    carries a warning. Overdue tasks never get that warning: every day is
    already after their due date.

    Returns:
        SlotResult with the date, or with date None when nothing fits
    """
    task = scored.task
    start = start or options.today
    remaining = options.look_ahead_days - days_between(options.today, start)

    for day in date_range(start, remaining):
        if not context.can_fit_task(day, task):
            continue

        if task.due_date and options.today <= task.due_date < day:
            return SlotResult(
                date=day,
                warning=(
                    f'Task "{task.title}" scheduled after due date on '
                    f'{day.isoformat()} to maintain daily limits.'
                ),
            )
        return SlotResult(date=day)

    return SlotResult(date=None)


def handle_unscheduled_task(
    scored: ScoredTask,
    context: SchedulingContext,
    options: SchedulingOptions
) -> SlotResult:
    """
    Best-effort placement when no day in the window has room.

    The task goes on the last day of the window anyway, so it is never left
    without a date, and the caller gets a warning naming it.
    """
    last_day = add_days(options.today, options.look_ahead_days - 1)
    if logger.isEnabledFor(logging.DEBUG):
        details = "; ".join(context.check_capacity(last_day, scored.task).reasons)
        logger.debug("No room for %r on %s: %s", scored.task.title, last_day, details)

    return SlotResult(
        date=last_day,
        warning=(
            f'Task "{scored.task.title}" could not fit within '
            f'{options.look_ahead_days} days; placed on {last_day.isoformat()} anyway.'
        ),
    )


def schedule_tasks_greedy(
    scored_tasks: List[ScoredTask],
    context: SchedulingContext,
    options: SchedulingOptions
) -> Tuple[List[Task], List[str]]:
    """
    Place every task on a start date, highest priority first.

    Usage only grows during the pass, so a day that cannot take a task now
    never can later. Two pointers use that to avoid rescanning days:

    - ``first_open``: first day whose task count is below its cap, shared
      by every task.
    - ``resume_from``: per (category, hours) shape, the first day not yet
      found too full for that shape. A later task of the same shape starts
      its search there.

    Placement is still exactly first-fit; only days known to fail are
    skipped. Each shape walks the window at most once, so the number of
    capacity checks is bounded by tasks + shapes * look_ahead_days.

    Args:
        scored_tasks: Tasks to place, with their scores
        context: Ledger already seeded with the fixed tasks
        options: today and look-ahead window

    Returns:
        Tuple of (placed task copies in placement order, warnings)
    """
    placed: List[Task] = []
    warnings: List[str] = []

    window_end = add_days(options.today, options.look_ahead_days)
    first_open = options.today
    resume_from: Dict[Tuple[Category, float], date] = {}

    for scored in order_by_priority(scored_tasks):
        task = scored.task
        shape = (task.category, float(task.estimated_hours))

        while first_open < window_end and (
            context.get_task_count(first_open) >= context.get_max_tasks_for_date(first_open)
        ):
            first_open = add_days(first_open, 1)

        start = max(first_open, resume_from.get(shape, options.today))

        slot = SlotResult(date=None)
        if start < window_end:
            slot = find_slot_for_task(scored, context, options, start=start)

        if slot.date is None:
            # Over capacity by definition; the ledger only records fits
            resume_from[shape] = window_end
            slot = handle_unscheduled_task(scored, context, options)
            logger.warning(slot.warning)
        else:
            resume_from[shape] = slot.date
            context.reserve_capacity(slot.date, task)

        if slot.date == options.today or task.start_date == options.today:
            logger.debug(
                "Task %r: %s -> %s (today capacity: %d/%g)",
                task.title,
                task.start_date,
                slot.date,
                context.get_task_count(options.today),
                context.get_max_tasks_for_date(options.today),
            )

        placed.append(task.with_start_date(slot.date))

        if slot.warning:
            warnings.append(slot.warning)

    return placed, warnings
