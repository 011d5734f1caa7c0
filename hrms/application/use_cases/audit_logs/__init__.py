"""Audit log use cases."""

from hrms.application.use_cases.audit_logs.audit_log_operations import AuditLogService

__all__ = ["AuditLogService"]
