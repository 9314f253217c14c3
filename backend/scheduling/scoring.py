"""
Priority Scoring for the scheduling engine.

Every task gets an additive priority score built from four factors:
its Eisenhower quadrant, how close (or past) its deadline is, how much work
it represents relative to the time left, and how long it has been open.

Scoring Formula:
---------------
priority_score = base (quadrant)
               + deadline (overdue / due-soon pressure)
               + duration (estimated_hours / days_until_due * 15)
               + age (days since creation, capped at 10)

The score is a pure function of the task and the caller-supplied ``today``;
nothing here reads the system clock. The greedy scheduler places tasks in
descending score order, so these numbers decide who gets the earliest days.
"""

from datetime import date
from typing import Dict, List, Optional

from .dates import days_between, parse_date
from .domain import (
    EisenhowerQuadrant,
    Importance,
    PriorityScoreBreakdown,
    ScoredTask,
    Task,
    Urgency,
)


# Eisenhower Matrix base scores
QUADRANT_SCORES: Dict[EisenhowerQuadrant, int] = {
    EisenhowerQuadrant.URGENT_IMPORTANT: 100,
    EisenhowerQuadrant.NOT_URGENT_IMPORTANT: 80,
    EisenhowerQuadrant.URGENT_NOT_IMPORTANT: 60,
    EisenhowerQuadrant.NOT_URGENT_NOT_IMPORTANT: 40,
}

QUADRANT_REASONS: Dict[EisenhowerQuadrant, str] = {
    EisenhowerQuadrant.URGENT_IMPORTANT: "Urgent + Important",
    EisenhowerQuadrant.NOT_URGENT_IMPORTANT: "High impact",
    EisenhowerQuadrant.URGENT_NOT_IMPORTANT: "Urgent",
}


class PriorityScorer:
    """
    Calculates priority scores and human-readable reasons for tasks.

    Deadline scoring is graduated and never increases as the deadline moves
    further away:

        overdue by D days   200 + 25 * D
        due today           150
        due tomorrow        100
        due in 2-3 days      75
        due in 4-7 days      40
        later / no deadline   0
    """

    OVERDUE_BASE = 200
    OVERDUE_PER_DAY = 25
    DUE_TODAY_SCORE = 150
    DUE_TOMORROW_SCORE = 100
    DUE_SOON_SCORE = 75          # 2-3 days out
    DUE_THIS_WEEK_SCORE = 40     # 4-7 days out

    SOON_DAYS = 3
    WEEK_DAYS = 7

    DURATION_FACTOR = 15
    MAX_AGE_SCORE = 10

    # Tasks at least this long mention their size in the reason string
    LARGE_TASK_HOURS = 4

    def __init__(self, today: date):
        self.today = today

    # ---------- individual factors ----------

    def days_until_due(self, task: Task) -> Optional[int]:
        """Signed days from today to the due date, or None without one."""
        if task.due_date is None:
            return None
        return days_between(self.today, task.due_date)

    def days_since_created(self, task: Task) -> int:
        created = parse_date(task.created_at)
        if created is None:
            return 0
        return max(0, days_between(created, self.today))

    def calculate_base_score(self, task: Task) -> int:
        return QUADRANT_SCORES[get_eisenhower_quadrant(task)]

    def calculate_deadline_score(self, task: Task) -> int:
        """Deadline pressure; 0 for tasks with no due date or already done."""
        days = self.days_until_due(task)
        if days is None or task.completed:
            return 0

        if days < 0:
            return self.OVERDUE_BASE + self.OVERDUE_PER_DAY * abs(days)
        if days == 0:
            return self.DUE_TODAY_SCORE
        if days == 1:
            return self.DUE_TOMORROW_SCORE
        if days <= self.SOON_DAYS:
            return self.DUE_SOON_SCORE
        if days <= self.WEEK_DAYS:
            return self.DUE_THIS_WEEK_SCORE
        return 0

    def calculate_duration_score(self, task: Task) -> float:
        """
        Boost large tasks whose deadline is close.

        Formula: estimated_hours / max(1, days_until_due) * 15, so an 8-hour
        task due tomorrow contributes 120 while the same task due in a
        week contributes about 17.
        """
        days = self.days_until_due(task)
        if days is None or task.completed:
            return 0
        return float(task.estimated_hours) / max(1, days) * self.DURATION_FACTOR

    def calculate_age_score(self, task: Task) -> int:
        return min(self.days_since_created(task), self.MAX_AGE_SCORE)

    # ---------- combined ----------

    def get_score_breakdown(self, task: Task) -> PriorityScoreBreakdown:
        return PriorityScoreBreakdown(
            base=self.calculate_base_score(task),
            deadline=self.calculate_deadline_score(task),
            duration=self.calculate_duration_score(task),
            age=self.calculate_age_score(task),
        )

    def calculate_priority_score(self, task: Task) -> float:
        return (
            self.calculate_base_score(task)
            + self.calculate_deadline_score(task)
            + self.calculate_duration_score(task)
            + self.calculate_age_score(task)
        )

    def get_priority_reason(self, task: Task) -> str:
        """
        Explain in a few words why a task sits where it does.

        The first matching rule wins: completion, then deadline pressure,
        then quadrant, then age. Tasks with nothing notable fall back to
        "Scheduled today".
        """
        if task.completed:
            return "Completed"

        days = self.days_until_due(task)
        if days is not None:
            if days < 0:
                return f"Overdue by {_plural(abs(days), 'day')}"
            if days == 0:
                return "Due today"
            if days == 1:
                if task.estimated_hours >= self.LARGE_TASK_HOURS:
                    return f"{_hours(task.estimated_hours)} task, due tomorrow"
                return "Due tomorrow"
            if days <= self.SOON_DAYS:
                if task.estimated_hours >= self.LARGE_TASK_HOURS:
                    return f"{_hours(task.estimated_hours)} task, due in {days} days"
                return f"Due in {days} days"
            if days <= self.WEEK_DAYS:
                return f"Due in {days} days"

        quadrant_reason = QUADRANT_REASONS.get(get_eisenhower_quadrant(task))
        if quadrant_reason:
            return quadrant_reason

        age = self.days_since_created(task)
        if age > 0:
            return f"Aging {_plural(age, 'day')}"

        return "Scheduled today"

    def score(self, task: Task) -> ScoredTask:
        return ScoredTask(
            task=task,
            breakdown=self.get_score_breakdown(task),
            quadrant=get_eisenhower_quadrant(task),
            reason=self.get_priority_reason(task),
        )

    def analyze_tasks(self, tasks: List[Task]) -> List[ScoredTask]:
        """Score a list of tasks and sort them, highest priority first."""
        scored = [self.score(task) for task in tasks]
        scored.sort(key=lambda s: s.priority_score, reverse=True)
        return scored


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _hours(hours: float) -> str:
    return f"{float(hours):g}h"


# ==================== Module-level API ====================

def get_eisenhower_quadrant(task: Task) -> EisenhowerQuadrant:
    """Map (importance, urgency) to a quadrant. Display only."""
    is_urgent = task.urgency == Urgency.URGENT
    is_important = task.importance == Importance.IMPORTANT

    if is_urgent and is_important:
        return EisenhowerQuadrant.URGENT_IMPORTANT
    elif not is_urgent and is_important:
        return EisenhowerQuadrant.NOT_URGENT_IMPORTANT
    elif is_urgent and not is_important:
        return EisenhowerQuadrant.URGENT_NOT_IMPORTANT
    else:
        return EisenhowerQuadrant.NOT_URGENT_NOT_IMPORTANT


def calculate_priority_score(task: Task, today: date) -> float:
    return PriorityScorer(today).calculate_priority_score(task)


def get_score_breakdown(task: Task, today: date) -> PriorityScoreBreakdown:
    return PriorityScorer(today).get_score_breakdown(task)


def get_priority_reason(task: Task, today: date) -> str:
    return PriorityScorer(today).get_priority_reason(task)


def add_priority_scores(tasks: List[Task], today: date) -> List[ScoredTask]:
    """Attach score, quadrant and reason to each task, keeping input order."""
    scorer = PriorityScorer(today)
    return [scorer.score(task) for task in tasks]
