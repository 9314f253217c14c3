"""
Capacity ledger for task scheduling.

SchedulingContext keeps per-date running totals so that every capacity
question is a dictionary lookup instead of a scan over placed tasks. It
tracks three things for each calendar date:

1. Task count (e.g. max 4 tasks/day)
2. Hours per category (e.g. max 3 hours of Work/day)
3. Total hours (e.g. max 8 hours/day)

A ledger lives for one scheduling run: it is created, seeded with the tasks
whose dates are already fixed, consumed by the greedy pass and discarded.
It is not thread-safe and does not need to be.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable

from .dates import is_weekend
from .domain import (
    CapacityCheckResult,
    Category,
    CategoryLimits,
    DailyMaxHours,
    DailyMaxTasks,
    Task,
)


logger = logging.getLogger(__name__)

# Slack for float sums such as 1.1 + 1.3 + 0.6 landing just above 3.0
HOURS_TOLERANCE = 1e-9


class SchedulingContext:
    """
    Per-date capacity index with O(1) checks and reservations.

    Weekday/weekend caps are chosen from the calendar day-of-week of the
    date being asked about.
    """

    def __init__(
        self,
        category_limits: CategoryLimits,
        daily_max_hours: DailyMaxHours,
        daily_max_tasks: DailyMaxTasks
    ):
        self.category_limits = category_limits
        self.daily_max_hours = daily_max_hours
        self.daily_max_tasks = daily_max_tasks

        self._tasks_per_day: Dict[date, int] = defaultdict(int)
        self._total_hours_per_day: Dict[date, float] = defaultdict(float)
        self._category_hours_per_day: Dict[date, Dict[Category, float]] = defaultdict(
            lambda: defaultdict(float)
        )

    # ---------- seeding / reservations ----------

    def seed_with_existing_tasks(self, tasks: Iterable[Task]) -> int:
        """
        Reserve capacity for tasks that will not be moved.

        Tasks without a start_date hold no day and are skipped.

        Returns:
            Number of tasks that were seeded
        """
        seeded = 0
        for task in tasks:
            if task.start_date:
                self.reserve_capacity(task.start_date, task)
                seeded += 1
        logger.debug("Seeded capacity ledger with %d fixed task(s)", seeded)
        return seeded

    def reserve_capacity(self, day: date, task: Task) -> None:
        """
        Commit a task's hours and count against ``day``.

        No check is made here; callers use can_fit_task() first when they
        need the limits respected.
        """
        hours = float(task.estimated_hours)
        self._tasks_per_day[day] += 1
        self._category_hours_per_day[day][task.category] += hours
        self._total_hours_per_day[day] += hours

    def release_task_capacity(self, task: Task) -> None:
        """Undo a reservation for the task's current start_date, never below zero."""
        day = task.start_date
        if not day:
            return

        hours = float(task.estimated_hours)
        if self._tasks_per_day.get(day, 0) > 0:
            self._tasks_per_day[day] -= 1

        category_hours = self._category_hours_per_day.get(day)
        if category_hours is not None and category_hours.get(task.category, 0) > 0:
            category_hours[task.category] = max(0.0, category_hours[task.category] - hours)

        if self._total_hours_per_day.get(day, 0) > 0:
            self._total_hours_per_day[day] = max(0.0, self._total_hours_per_day[day] - hours)

    # ---------- capacity checks ----------

    def check_capacity(self, day: date, task: Task) -> CapacityCheckResult:
        """
        Check whether ``task`` fits on ``day`` and explain why not.

        All three constraints must hold at once: task count below the cap,
        category hours within the category cap, total hours within the
        daily cap.
        """
        hours = float(task.estimated_hours)

        max_tasks = self.get_max_tasks_for_date(day)
        task_count = self.get_task_count(day)

        category_limit = self.get_category_limit(day, task.category)
        category_hours = self.get_category_hours(day, task.category)

        daily_limit = self.get_daily_limit(day)
        total_hours = self.get_total_hours(day)

        task_count_ok = task_count < max_tasks
        category_ok = category_hours + hours <= category_limit + HOURS_TOLERANCE
        daily_ok = total_hours + hours <= daily_limit + HOURS_TOLERANCE

        reasons = []
        if not task_count_ok:
            reasons.append(f"Task count ({task_count}/{max_tasks:g})")
        if not category_ok:
            reasons.append(
                f"Category hours ({category_hours:.1f}+{hours:g}>{category_limit:g})"
            )
        if not daily_ok:
            reasons.append(f"Daily hours ({total_hours:.1f}+{hours:g}>{daily_limit:g})")

        return CapacityCheckResult(
            can_fit=task_count_ok and category_ok and daily_ok,
            task_count=task_count,
            category_hours=category_hours,
            total_hours=total_hours,
            max_tasks=max_tasks,
            category_limit=category_limit,
            daily_limit=daily_limit,
            reasons=reasons,
        )

    def can_fit_task(self, day: date, task: Task) -> bool:
        return self.check_capacity(day, task).can_fit

    # ---------- lookups ----------

    def get_task_count(self, day: date) -> int:
        return self._tasks_per_day.get(day, 0)

    def get_total_hours(self, day: date) -> float:
        return self._total_hours_per_day.get(day, 0.0)

    def get_category_hours(self, day: date, category: Category) -> float:
        category_hours = self._category_hours_per_day.get(day)
        if category_hours is None:
            return 0.0
        return category_hours.get(category, 0.0)

    def get_max_tasks_for_date(self, day: date) -> float:
        return self.daily_max_tasks.for_weekend(is_weekend(day))

    def get_daily_limit(self, day: date) -> float:
        return self.daily_max_hours.for_weekend(is_weekend(day))

    def get_category_limit(self, day: date, category: Category) -> float:
        return self.category_limits[category].for_weekend(is_weekend(day))

    def get_debug_info(self, day: date) -> Dict:
        """Snapshot of one date's usage and caps, for logging and troubleshooting."""
        category_hours = self._category_hours_per_day.get(day, {})
        return {
            'date': day.isoformat(),
            'task_count': self.get_task_count(day),
            'total_hours': self.get_total_hours(day),
            'category_hours': {c.value: h for c, h in category_hours.items()},
            'max_tasks': self.get_max_tasks_for_date(day),
            'daily_limit': self.get_daily_limit(day),
        }


# The ledger under its descriptive name
CapacityLedger = SchedulingContext
