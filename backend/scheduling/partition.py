"""
Task partitioning and recurring-instance deduplication.

Before anything is placed, tasks are split into four mutually exclusive
buckets. Only ``to_schedule`` is moved by the greedy pass; the other three
keep their dates and merely reserve capacity.
"""

import logging
from datetime import date
from typing import Dict, List, Tuple

from .domain import Task, TaskPartition


logger = logging.getLogger(__name__)


def partition_tasks(tasks: List[Task], today: date) -> TaskPartition:
    """
    Partition tasks into completed, recurring, pinned and to-schedule groups.

    Precedence is fixed: completed wins over everything, recurring wins over
    pinned, and a pin only counts when it is for today. A pin left over from
    an earlier day has expired and the task is scheduled normally.
    """
    partition = TaskPartition()

    for task in tasks:
        if task.completed:
            partition.completed.append(task)
        elif task.is_recurring:
            partition.recurring.append(task)
        elif task.pinned_date == today:
            partition.pinned.append(task)
        else:
            partition.to_schedule.append(task)

    return partition


def deduplicate_recurring_tasks(tasks: List[Task]) -> Tuple[List[Task], List[str]]:
    """
    Drop recurring instances that collide on the same series and date.

    For each (recurring_series_id, start_date) pair only the instance with
    the earliest ``created_at`` survives. Tasks missing either field cannot
    be matched and are always kept, as are completed tasks. Survivors keep
    their input order.

    Returns:
        Tuple of (surviving tasks, one message per removed duplicate)
    """
    kept: Dict[Tuple[str, date], Task] = {}
    removed_ids = set()
    duplicates_found: List[str] = []

    for task in tasks:
        if task.completed or not task.start_date or not task.recurring_series_id:
            continue

        key = (task.recurring_series_id, task.start_date)
        existing = kept.get(key)

        if existing is None:
            kept[key] = task
        elif task.created_at < existing.created_at:
            # The newcomer is the original instance; evict the one we held
            kept[key] = task
            removed_ids.add(id(existing))
            duplicates_found.append(_duplicate_message(existing))
        else:
            removed_ids.add(id(task))
            duplicates_found.append(_duplicate_message(task))

    survivors = [task for task in tasks if id(task) not in removed_ids]

    if duplicates_found:
        logger.debug("Removed %d duplicate recurring instance(s)", len(duplicates_found))

    return survivors, duplicates_found


def _duplicate_message(task: Task) -> str:
    return f"{task.title} on {task.start_date.isoformat()} (removed duplicate)"
