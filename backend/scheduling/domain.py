"""
Domain types for the scheduling engine.

Everything the engine consumes or produces is defined here: the Task entity,
the per-user capacity rules, and the result records handed back to callers.
The engine treats Task objects as values; placement returns copies with an
updated start_date rather than mutating the caller's objects.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional


# ==================== Enumerations ====================

class Category(Enum):
    """Fixed set of task categories; every category always has limits."""
    WORK = "Work"
    HOME = "Home"
    HEALTH = "Health"
    PERSONAL = "Personal"


class Importance(Enum):
    IMPORTANT = "important"
    NOT_IMPORTANT = "not-important"


class Urgency(Enum):
    URGENT = "urgent"
    NOT_URGENT = "not-urgent"


class EisenhowerQuadrant(Enum):
    """Eisenhower Matrix quadrant classification."""
    URGENT_IMPORTANT = "urgent-important"
    NOT_URGENT_IMPORTANT = "not-urgent-important"
    URGENT_NOT_IMPORTANT = "urgent-not-important"
    NOT_URGENT_NOT_IMPORTANT = "not-urgent-not-important"


# ==================== Task ====================

@dataclass
class Task:
    """
    A user's task as supplied by the caller.

    Attributes:
        id: Unique task identifier
        title: Display title, used in warnings and duplicate messages
        category: One of the fixed categories
        estimated_hours: Expected effort (positive)
        importance / urgency: Eisenhower inputs
        due_date: Optional deadline
        start_date: The scheduler's output; the day the task is planned for
        pinned_date: User override; a task pinned to today is never moved
        created_at: Creation timestamp, used for age and dedup tie-breaks
        recurring_series_id: Groups occurrences of one recurring definition
    """
    id: str
    title: str
    category: Category
    estimated_hours: float
    created_at: datetime
    importance: Importance = Importance.NOT_IMPORTANT
    urgency: Urgency = Urgency.NOT_URGENT
    due_date: Optional[date] = None
    start_date: Optional[date] = None
    pinned_date: Optional[date] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    is_recurring: bool = False
    recurring_series_id: Optional[str] = None

    def with_start_date(self, start_date: Optional[date]) -> 'Task':
        """Return a copy of this task placed on ``start_date``."""
        return replace(self, start_date=start_date)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'title': self.title,
            'category': self.category.value,
            'estimated_hours': self.estimated_hours,
            'importance': self.importance.value,
            'urgency': self.urgency.value,
            'due_date': _iso(self.due_date),
            'start_date': _iso(self.start_date),
            'pinned_date': _iso(self.pinned_date),
            'completed': self.completed,
            'completed_at': _iso(self.completed_at),
            'created_at': _iso(self.created_at),
            'is_recurring': self.is_recurring,
            'recurring_series_id': self.recurring_series_id,
        }


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ==================== Capacity Rules ====================

@dataclass(frozen=True)
class DayCaps:
    """A pair of caps, one for Monday-Friday and one for Saturday/Sunday."""
    weekday: float
    weekend: float

    def for_weekend(self, weekend: bool) -> float:
        return self.weekend if weekend else self.weekday

    def to_dict(self) -> Dict:
        return {'weekday': self.weekday, 'weekend': self.weekend}


# Ceiling on total hours placed on a single date, across all categories.
DailyMaxHours = DayCaps

# Ceiling on the number of tasks placed on a single date.
DailyMaxTasks = DayCaps


@dataclass(frozen=True)
class CategoryLimits:
    """Per-category hour caps. Every Category must be present."""
    limits: Dict[Category, DayCaps]

    def __post_init__(self):
        missing = [c.value for c in Category if c not in self.limits]
        if missing:
            raise ValueError(f"Category limits missing for: {', '.join(missing)}")

    def __getitem__(self, category: Category) -> DayCaps:
        return self.limits[category]

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, float]]) -> 'CategoryLimits':
        """Build limits from ``{'Work': {'weekday': 4, 'weekend': 2}, ...}``."""
        return cls({
            Category(name): DayCaps(weekday=caps['weekday'], weekend=caps['weekend'])
            for name, caps in data.items()
        })

    def to_dict(self) -> Dict:
        return {c.value: self.limits[c].to_dict() for c in Category}


# ==================== Scoring Results ====================

@dataclass(frozen=True)
class PriorityScoreBreakdown:
    """Additive components of a task's priority score."""
    base: float = 0.0
    deadline: float = 0.0
    duration: float = 0.0
    age: float = 0.0

    @property
    def total(self) -> float:
        return self.base + self.deadline + self.duration + self.age

    def to_dict(self) -> Dict:
        return {
            'base': self.base,
            'deadline': self.deadline,
            'duration': round(self.duration, 2),
            'age': self.age,
            'total': round(self.total, 2),
        }


@dataclass
class ScoredTask:
    """A task together with its score, quadrant and explanation."""
    task: Task
    breakdown: PriorityScoreBreakdown
    quadrant: EisenhowerQuadrant
    reason: str = ""

    @property
    def priority_score(self) -> float:
        return self.breakdown.total

    def to_dict(self) -> Dict:
        data = self.task.to_dict()
        data.update({
            'priority_score': round(self.priority_score, 2),
            'quadrant': self.quadrant.value,
            'score_breakdown': self.breakdown.to_dict(),
            'reason': self.reason,
        })
        return data


# ==================== Scheduling Results ====================

@dataclass
class TaskPartition:
    """Mutually exclusive buckets produced by partition_tasks()."""
    completed: List[Task] = field(default_factory=list)
    recurring: List[Task] = field(default_factory=list)
    pinned: List[Task] = field(default_factory=list)
    to_schedule: List[Task] = field(default_factory=list)

    def fixed(self) -> List[Task]:
        """Tasks whose date is already decided and only seed the ledger."""
        return self.completed + self.recurring + self.pinned


@dataclass(frozen=True)
class SchedulingOptions:
    today: date
    look_ahead_days: int = 90

    def __post_init__(self):
        if self.look_ahead_days < 1:
            raise ValueError("look_ahead_days must be at least 1")


@dataclass
class CapacityCheckResult:
    """Outcome of a capacity check, with the numbers behind it."""
    can_fit: bool
    task_count: int
    category_hours: float
    total_hours: float
    max_tasks: float
    category_limit: float
    daily_limit: float
    reasons: List[str] = field(default_factory=list)

    def __bool__(self):
        return self.can_fit


@dataclass(frozen=True)
class SlotResult:
    date: Optional[date]
    warning: Optional[str] = None


@dataclass(frozen=True)
class RescheduledTask:
    task: Task
    previous_date: Optional[date]

    def to_dict(self) -> Dict:
        return {
            'task': self.task.to_dict(),
            'previous_date': _iso(self.previous_date),
        }


@dataclass
class SchedulingResult:
    """Return value of assign_start_dates()."""
    tasks: List[Task]
    warnings: List[str] = field(default_factory=list)
    rescheduled_tasks: List[RescheduledTask] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'tasks': [t.to_dict() for t in self.tasks],
            'warnings': list(self.warnings),
            'rescheduled_tasks': [r.to_dict() for r in self.rescheduled_tasks],
        }
