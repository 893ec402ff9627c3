from .cleanup import AdminAccount, CleanupPolicy, CleanupSummary, VerificationResult
from .filters import AllOf, Equals, Filter, In, IsNotNull, MatchAll, NotEquals

__all__ = [
    "AdminAccount",
    "CleanupPolicy",
    "CleanupSummary",
    "VerificationResult",
    "AllOf",
    "Equals",
    "Filter",
    "In",
    "IsNotNull",
    "MatchAll",
    "NotEquals",
]
