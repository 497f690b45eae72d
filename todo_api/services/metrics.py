"""Request and database metrics."""

from collections import Counter, deque
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from todo_api.models.category import Category
from todo_api.models.todo import Todo


class RequestMetrics:
    """Process-wide request counters with a bounded response-time history.

    Call reset() at startup (and in tests) to start from a clean slate.
    """

    def __init__(self, history_size: int = 1000):
        self.reset(history_size)

    def reset(self, history_size: int | None = None) -> None:
        """Clear all counters, optionally resizing the history."""
        if history_size is None:
            history_size = self.response_times.maxlen
        self.total = 0
        self.by_method: Counter[str] = Counter()
        self.by_status: Counter[str] = Counter()
        self.response_times: deque[float] = deque(maxlen=history_size)

    def record(self, method: str, status_code: int, duration_ms: float) -> None:
        """Record one finished request."""
        self.total += 1
        self.by_method[method] += 1
        self.by_status[str(status_code)] += 1
        self.response_times.append(duration_ms)

    def snapshot(self) -> dict[str, Any]:
        """Summarize the counters and the retained response times."""
        times = self.response_times
        return {
            "total_requests": self.total,
            "requests_by_method": dict(self.by_method),
            "requests_by_status": dict(self.by_status),
            "avg_response_time_ms": round(sum(times) / len(times), 2) if times else 0,
            "min_response_time_ms": round(min(times), 2) if times else 0,
            "max_response_time_ms": round(max(times), 2) if times else 0,
        }


request_metrics = RequestMetrics()


def collect_database_stats(db: Session) -> dict[str, Any]:
    """Count todos by state and priority, and categories."""
    active = Todo.active()

    def count(*criteria) -> int:
        return db.query(func.count(Todo.id)).filter(*criteria).scalar() or 0

    priority_rows = (
        db.query(Todo.priority, func.count(Todo.id))
        .filter(active)
        .group_by(Todo.priority)
        .all()
    )

    return {
        "total_todos": count(active),
        "completed_todos": count(active, Todo.completed.is_(True)),
        "pending_todos": count(active, Todo.completed.is_(False)),
        "deleted_todos": count(Todo.deleted_at.is_not(None)),
        "total_categories": db.query(func.count(Category.id)).scalar() or 0,
        "priority_distribution": {
            f"priority_{priority}": total for priority, total in priority_rows
        },
    }
