"""
Human-readable console report for a cleanup run.

The wording is meant for an operator watching the run, not for parsing.
"""

import sys
from typing import List, Optional, TextIO

from admin_cleanup.models.cleanup import (
    AdminAccount,
    CleanupPolicy,
    CleanupSummary,
    VerificationResult,
)

RULE = "=" * 60


class ConsoleReport:
    """Writes progress lines to stdout and failures to stderr"""

    def __init__(self, stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        self.stream = stream
        self.error_stream = error_stream

    def _out(self, line: str = ""):
        print(line, file=self.stream or sys.stdout)

    def _err(self, line: str = ""):
        print(line, file=self.error_stream or sys.stderr)

    def starting(self, policy: CleanupPolicy):
        self._out("🚀 Starting database cleanup...")
        if policy == CleanupPolicy.KEEP_ADMIN_ONLY:
            self._out("⚠️  WARNING: This will delete ALL customer requests, vendor data "
                      "and every non-admin user account!")
        else:
            self._out("⚠️  WARNING: This will delete ALL customer requests and vendor data!")
        self._out()

    def connected(self):
        self._out("✅ Connected to MongoDB\n")

    def step(self, title: str):
        self._out(f"🗑️  Starting cleanup of {title}...")

    def deleted(self, count: int, what: str):
        self._out(f"   ✅ Deleted {count} {what}")

    def vendors_found(self, count: int):
        self._out(f"   📋 Found {count} vendor(s) to delete")

    def no_vendors(self):
        self._out("   ⚠️  No vendors found, skipping user deletion")

    def admins_remaining(self, admins: List[AdminAccount]):
        self._out(f"   👤 {len(admins)} admin account(s) remain")
        for admin in admins:
            self._out(f"      - {admin.email or '<no email>'} ({admin.role})")

    def end_step(self):
        self._out()

    def verification(self, result: VerificationResult, policy: CleanupPolicy):
        self._out("🔍 Final verification...")

        if result.warnings:
            self._out("⚠️  Warning: Some data still exists!")
            for warning in result.warnings:
                self._out(f"   - {warning}")
        else:
            self._out("✅ All data cleaned successfully!")
            self._out(f"   - Customer requests: {result.remaining_customer_requests}")
            self._out(f"   - Vendors: {result.remaining_vendor_registrations}")
            if policy == CleanupPolicy.CASCADE_BY_VENDOR_REFERENCE:
                self._out(f"   - Vendor users: {result.remaining_vendor_users}")
            else:
                self._out(f"   - Non-admin users: {result.remaining_non_admin_users}")

        if policy == CleanupPolicy.KEEP_ADMIN_ONLY:
            self._out(f"   📊 Total users remaining: {result.remaining_users}")
            self.admins_remaining(result.admins)

    def summary(self, summary: CleanupSummary):
        self._out("\n" + RULE)
        self._out("✅ DATABASE CLEANUP COMPLETED!")
        self._out(RULE)
        self._out(f"📊 Total records deleted: {summary.total_deleted}")
        for label, count in summary.categories():
            self._out(f"   - {label}: {count}")
        self._out(RULE)
        if summary.policy == CleanupPolicy.KEEP_ADMIN_ONLY:
            self._out("✨ Admin dashboard will now show no customer requests, vendor data "
                      "or non-admin users. Admin logins are unchanged.")
        else:
            self._out("✨ Admin dashboard will now show no customer requests or vendor data.")
        self._out(RULE)

    def failed(self, error: BaseException):
        self._err(f"\n❌ Error during cleanup: {error}")

    def closed(self):
        self._out("\n🔌 Database connection closed")

    def cancelled(self):
        self._out("Cancelled. Nothing was deleted.")
