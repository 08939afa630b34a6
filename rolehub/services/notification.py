"""Fire-and-forget delivery of role lifecycle notifications."""

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from rolehub.domain.role import Role

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[str, BaseException], None]


class LoggingNotifier:
    """NotificationPort that only writes each event to the log."""

    def notify_role_created(self, role: Role) -> None:
        logger.info(
            "Role created - id=%s name=%s created_at=%s",
            role.id,
            role.name,
            role.created_at,
        )

    def notify_role_updated(self, role: Role) -> None:
        logger.info(
            "Role updated - id=%s name=%s created_at=%s",
            role.id,
            role.name,
            role.created_at,
        )

    def notify_role_deleted(self, role_id: int) -> None:
        logger.info("Role deleted - id=%s", role_id)


class NotificationDispatcher:
    """
    Runs notification calls on a background thread pool.

    The pool's work queue is unbounded and callers never wait on the result.
    Every exception raised by a notification is caught inside the task,
    logged, and handed to the optional ``error_reporter``; it never reaches
    the code that submitted it.
    """

    def __init__(
        self,
        max_workers: int = 4,
        error_reporter: ErrorReporter | None = None,
    ):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="role-notify"
        )
        self._error_reporter = error_reporter

    def submit(self, event: str, fn: Callable[..., Any], *args: Any) -> Future | None:
        """Schedule ``fn(*args)``. Returns the future, or None if it could not be scheduled."""
        try:
            return self._executor.submit(self._run, event, fn, *args)
        except RuntimeError as e:
            # Executor already shut down
            logger.error("Dropped %s notification: %s", event, e)
            self._report(event, e)
            return None

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, event: str, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:
            logger.exception("Failed to send %s notification", event)
            self._report(event, e)

    def _report(self, event: str, error: BaseException) -> None:
        if self._error_reporter is None:
            return
        try:
            self._error_reporter(event, error)
        except Exception:
            logger.exception("Error reporter failed for %s notification", event)
