"""
Scheduling entry points.

assign_start_dates() wires the pieces into one pipeline:

    partition -> dedupe recurring -> score -> seed ledger with fixed tasks
              -> greedy placement -> merge -> diff against input dates

It is a pure function of its arguments: no clock, no storage, no shared
state. The focus helpers below are read-only projections used by views.
"""

import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, List

from .context import SchedulingContext
from .dates import is_weekend
from .domain import (
    CategoryLimits,
    DailyMaxHours,
    DailyMaxTasks,
    RescheduledTask,
    ScoredTask,
    SchedulingOptions,
    SchedulingResult,
    Task,
)
from .partition import deduplicate_recurring_tasks, partition_tasks
from .scoring import PriorityScorer, add_priority_scores
from .strategy import schedule_tasks_greedy


logger = logging.getLogger(__name__)

DEFAULT_LOOK_AHEAD_DAYS = 90


def assign_start_dates(
    tasks: List[Task],
    category_limits: CategoryLimits,
    daily_max_hours: DailyMaxHours,
    daily_max_tasks: DailyMaxTasks,
    today: date,
    look_ahead_days: int = DEFAULT_LOOK_AHEAD_DAYS
) -> SchedulingResult:
    """
    Give every schedulable task a start date within capacity.

    Completed, recurring and pinned-for-today tasks keep their dates and only
    reserve capacity. Everything else is placed greedily by priority.
    Duplicate recurring instances are dropped from the result and reported
    in ``warnings`` alongside any placement problems.

    Returns:
        SchedulingResult with the full task list (input order), warnings,
        and the tasks whose start_date changed.
    """
    options = SchedulingOptions(today=today, look_ahead_days=look_ahead_days)

    partition = partition_tasks(tasks, today)
    partition.recurring, duplicates_found = deduplicate_recurring_tasks(partition.recurring)

    context = SchedulingContext(category_limits, daily_max_hours, daily_max_tasks)
    context.seed_with_existing_tasks(partition.fixed())

    scored = add_priority_scores(partition.to_schedule, today)
    placed, placement_warnings = schedule_tasks_greedy(scored, context, options)

    placed_by_id = {t.id: t for t in placed}
    surviving = {t.id for t in partition.fixed()}

    result_tasks: List[Task] = []
    rescheduled: List[RescheduledTask] = []
    for task in tasks:
        if task.id in placed_by_id:
            new_task = placed_by_id[task.id]
            result_tasks.append(new_task)
            if new_task.start_date != task.start_date:
                rescheduled.append(RescheduledTask(task=new_task, previous_date=task.start_date))
        elif task.id in surviving:
            result_tasks.append(task)

    warnings = duplicates_found + placement_warnings

    logger.info(
        "Scheduled %d task(s): %d rescheduled, %d fixed, %d warning(s)",
        len(placed), len(rescheduled), len(surviving), len(warnings),
    )

    return SchedulingResult(
        tasks=result_tasks,
        warnings=warnings,
        rescheduled_tasks=rescheduled,
    )


# ==================== Focus Selection ====================

def get_todays_focus_tasks(
    tasks: List[Task],
    today: date,
    daily_max_tasks: DailyMaxTasks
) -> List[ScoredTask]:
    """
    Tasks planned for today, best first, capped at today's task limit.

    Open tasks come first in descending score; tasks already completed
    today follow them. Each entry carries its quadrant for display.
    """
    todays = [t for t in tasks if t.start_date == today]
    scorer = PriorityScorer(today)

    open_tasks = scorer.analyze_tasks([t for t in todays if not t.completed])
    done_tasks = [scorer.score(t) for t in todays if t.completed]

    limit = int(daily_max_tasks.for_weekend(is_weekend(today)))
    return (open_tasks + done_tasks)[:limit]


def group_tasks_by_date(tasks: List[Task], today: date) -> Dict[date, List[ScoredTask]]:
    """Group open, scheduled tasks by start date, each day sorted by score."""
    scorer = PriorityScorer(today)
    grouped: Dict[date, List[Task]] = OrderedDict()

    for task in sorted(
        (t for t in tasks if not t.completed and t.start_date),
        key=lambda t: t.start_date,
    ):
        grouped.setdefault(task.start_date, []).append(task)

    return OrderedDict(
        (day, scorer.analyze_tasks(day_tasks)) for day, day_tasks in grouped.items()
    )
