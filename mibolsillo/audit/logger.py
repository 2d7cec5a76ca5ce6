"""
Audit Logger

Every change to the user's movements is logged, as well as every
failure of the persistence layer. The store never surfaces storage
problems to the UI, so these log records are the only trace of them.

The audit logger:
- Is synchronous, like everything else in the app
- Never raises (a broken log pipeline must not break a mutation)
"""

import logging
import sys
from typing import Optional
from uuid import UUID

import structlog

from mibolsillo.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog records to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger("mibolsillo").setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log.
    """

    def __init__(self, logger_name: str = "mibolsillo.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be emitted.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    def log_movement_added(
        self,
        movement_id: UUID,
        movement_type: str,
        amount: str,
        category: Optional[str] = None,
    ) -> None:
        """Log a new movement."""
        self.log(AuditEventBuilder.movement_added(
            movement_id=movement_id,
            movement_type=movement_type,
            amount=amount,
            category=category,
        ))

    def log_movements_cleared(self, removed: int) -> None:
        """Log a clear-all."""
        self.log(AuditEventBuilder.movements_cleared(removed=removed))

    def log_form_rejected(self, issues: list[dict]) -> None:
        """Log a rejected form submission."""
        self.log(AuditEventBuilder.form_validation_failed(issues=issues))

    def log_store_hydrated(self, key: str, count: int, version: Optional[int]) -> None:
        self.log(AuditEventBuilder.store_hydrated(key=key, count=count, version=version))

    def log_store_migrated(self, key: str, from_version: int, to_version: int) -> None:
        self.log(AuditEventBuilder.store_migrated(
            key=key,
            from_version=from_version,
            to_version=to_version,
        ))

    def log_hydration_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.store_hydration_failed(key=key, error_message=error_message))

    def log_persist_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.store_persist_failed(key=key, error_message=error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
