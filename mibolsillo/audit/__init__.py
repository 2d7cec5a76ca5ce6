"""Audit logging package."""

from mibolsillo.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
