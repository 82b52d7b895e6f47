"""Services for the penalty kernel."""

from penalty_kernel.services.transaction_list_service import TransactionListService

__all__ = [
    "TransactionListService",
]
