"""
Progress tracking for the phases of a run.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class TaskStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TaskInfo:
    """One phase of a run: a location, a section, or a testing pass."""
    name: str
    status: TaskStatus = TaskStatus.PENDING
    total_items: int = 0
    completed_items: int = 0
    failed_items: int = 0
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    message: str = ""

    @property
    def elapsed_time(self) -> Optional[float]:
        if not self.start_time:
            return None
        return (self.end_time or time.time()) - self.start_time


class ProgressTracker:
    """
    Logs start, progress and end of each phase and keeps every phase in
    ``tasks``.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        report_every: int = 10,
    ):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.report_every = report_every
        self.tasks: Dict[str, TaskInfo] = {}
        self.current_task: Optional[str] = None

    def start_task(self, task_name: str, total_items: int = 0) -> TaskInfo:
        task = TaskInfo(
            name=task_name, status=TaskStatus.RUNNING,
            total_items=total_items, start_time=time.time(),
        )
        self.tasks[task_name] = task
        self.current_task = task_name
        self.logger.info(f"\n--- {task_name} ---")
        return task

    def advance(self, succeeded: bool = True) -> None:
        """Count one finished unit of work of the current phase."""
        task = self.get_current_task()
        if task is None:
            return
        if succeeded:
            task.completed_items += 1
        else:
            task.failed_items += 1

        done = task.completed_items + task.failed_items
        if self.report_every and done % self.report_every == 0:
            self.logger.info(f"{task.name}: {done} processed so far...")

    def complete_task(self, message: str = "") -> None:
        task = self.get_current_task()
        if task is None:
            self.logger.warning("No active task to complete")
            return
        task.status = TaskStatus.COMPLETED
        task.end_time = time.time()
        task.message = message
        self.logger.info(
            f"Completed '{task.name}': {task.completed_items} ok, "
            f"{task.failed_items} failed in {task.elapsed_time:.2f}s"
        )
        self.current_task = None

    def fail_task(self, error_message: str) -> None:
        task = self.get_current_task()
        if task is None:
            self.logger.warning("No active task to fail")
            return
        task.status = TaskStatus.FAILED
        task.end_time = time.time()
        task.message = error_message
        self.logger.error(f"Task '{task.name}' failed: {error_message}")
        self.current_task = None

    def get_current_task(self) -> Optional[TaskInfo]:
        if not self.current_task:
            return None
        return self.tasks.get(self.current_task)

