"""Copy a schedule day's task list onto generated jobs"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

# Matches job_tasks.title
MAX_TASK_TITLE_LENGTH = 255


@dataclass(frozen=True)
class SeededTask:
    title: str
    position: int


def seed_tasks(raw_tasks: Optional[Iterable[Any]]) -> list[SeededTask]:
    """Trimmed, non-blank task titles in their original order, numbered from 0"""
    if not raw_tasks or isinstance(raw_tasks, (str, bytes, dict)):
        return []

    titles = []
    for task in raw_tasks:
        if not isinstance(task, str):
            continue
        title = task.strip()
        if title:
            titles.append(title[:MAX_TASK_TITLE_LENGTH])

    return [SeededTask(title=title, position=index) for index, title in enumerate(titles)]
