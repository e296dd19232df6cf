from .bulk_dispatcher import BulkDispatcher
from .notification_service import NotificationService
from .retry_executor import (
    EMAIL_RETRY_POLICY,
    SMS_RETRY_POLICY,
    ExecutionOutcome,
    ExecutionState,
    RetryExecutor,
    RetryPolicy,
)

__all__ = [
    "EMAIL_RETRY_POLICY",
    "SMS_RETRY_POLICY",
    "BulkDispatcher",
    "ExecutionOutcome",
    "ExecutionState",
    "NotificationService",
    "RetryExecutor",
    "RetryPolicy",
]
