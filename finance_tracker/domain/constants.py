"""Domain constants for wallet operations."""

TRANSFER_CATEGORY = "Transfer"

DEFAULT_TRANSFER_DESCRIPTION = "Funds transfer"

# Usage percent at which a budget warning is raised.
BUDGET_WARNING_THRESHOLD = 80.0

# Returned by usage queries when no positive budget is set.
USAGE_NOT_APPLICABLE = -1.0

TRANSACTION_ID_LENGTH = 8


__all__ = [
    "TRANSFER_CATEGORY",
    "DEFAULT_TRANSFER_DESCRIPTION",
    "BUDGET_WARNING_THRESHOLD",
    "USAGE_NOT_APPLICABLE",
    "TRANSACTION_ID_LENGTH",
]
