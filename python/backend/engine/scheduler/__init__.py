from backend.engine.scheduler.tasks import ScheduledTask, TaskQueue

__all__ = ["ScheduledTask", "TaskQueue"]
