"""Hand-off of best-effort side effects to the background workers

Notifications and activity entries are queued only after the primary write
has committed. A broker outage is logged here and never reaches the caller.
"""

from typing import Any, Callable, Optional
import structlog

logger = structlog.get_logger()

Sender = Callable[..., Any]


class EventDispatcher:
    """Queues Celery tasks by name"""

    def __init__(self, sender: Optional[Sender] = None):
        self._sender = sender

    def _send(self, task_name: str, *args: Any) -> None:
        try:
            sender = self._sender
            if sender is None:
                from app.jobs.celery_app import celery_app
                sender = celery_app.send_task
            sender(task_name, args=list(args))
        except Exception as e:
            logger.error("Failed to dispatch background task", task=task_name, error=str(e))

    def reservation_confirmed(self, reservation_id: str) -> None:
        self._send("notify_reservation_confirmed", reservation_id)

    def reservation_cancelled(self, reservation_id: str) -> None:
        self._send("notify_reservation_cancelled", reservation_id)

    def activity(
        self,
        actor_email: str,
        action: str,
        details: str = "",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        self._send("record_activity", actor_email, action, details, resource_type, resource_id)
