"""
Cleanup Models
Policy selection and the result types a cleanup run reports.
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, computed_field


class CleanupPolicy(str, Enum):
    """Which user accounts survive the user purge step"""
    # Delete users whose vendor_id points at a deleted vendor registration
    CASCADE_BY_VENDOR_REFERENCE = "cascade_by_vendor_reference"
    # Delete every user that is not an admin
    KEEP_ADMIN_ONLY = "keep_admin_only"


class AdminAccount(BaseModel):
    """An administrator account left in place after the run"""
    id: Optional[str] = None
    email: Optional[str] = None
    role: str = "admin"

    @classmethod
    def from_document(cls, document: dict) -> "AdminAccount":
        raw_id = document.get("_id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            email=document.get("email"),
            role=document.get("role", "admin"),
        )


class VerificationResult(BaseModel):
    """
    Counts re-read from the store after deletion.

    ``remaining_vendor_users`` is only checked under the cascade policy,
    ``remaining_non_admin_users`` and ``remaining_users`` only under
    keep-admin-only. Unchecked counts stay None.
    """
    remaining_customer_requests: int = 0
    remaining_vendor_registrations: int = 0
    remaining_vendor_users: Optional[int] = None
    remaining_non_admin_users: Optional[int] = None
    remaining_users: Optional[int] = None
    admins: List[AdminAccount] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.warnings


class CleanupSummary(BaseModel):
    """Per-category deletion counts for one run"""
    policy: CleanupPolicy
    run_id: Optional[str] = None
    vendors_found: int = 0
    customer_requests: int = 0
    vendor_registrations: int = 0
    vendor_users: int = 0
    non_admin_users: int = 0
    orphaned_vendor_users: int = 0
    remaining_admins: List[AdminAccount] = Field(default_factory=list)
    verification: Optional[VerificationResult] = None

    @computed_field
    @property
    def total_deleted(self) -> int:
        return sum(count for _, count in self.categories())

    def categories(self) -> List[Tuple[str, int]]:
        """Ordered (label, deleted count) pairs for the categories this policy touches"""
        rows = [
            ("Customer requests", self.customer_requests),
            ("Vendor registrations", self.vendor_registrations),
        ]
        if self.policy == CleanupPolicy.CASCADE_BY_VENDOR_REFERENCE:
            rows.append(("Vendor user accounts", self.vendor_users))
        else:
            rows.append(("Non-admin user accounts", self.non_admin_users))
            rows.append(("Leftover vendor-linked accounts", self.orphaned_vendor_users))
        return rows
