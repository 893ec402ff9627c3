"""
Cleanup runner: resets the admin dashboard by bulk-deleting customer
requests, vendor registrations and user accounts, then verifies and
reports what is left.

Steps run strictly one after another. A store failure aborts the rest of
the run; deletions already applied stay applied.
"""

import time
import uuid
from typing import List, Optional

from admin_cleanup.core.config import Config
from admin_cleanup.core.errors import StoreOperationFailure
from admin_cleanup.core.logger import logger
from admin_cleanup.db.mongodb import MongoConnection
from admin_cleanup.models.cleanup import (
    AdminAccount,
    CleanupPolicy,
    CleanupSummary,
    VerificationResult,
)
from admin_cleanup.models.filters import AllOf, Equals, In, IsNotNull, MatchAll, NotEquals
from admin_cleanup.repositories.record_repository import RecordRepository
from admin_cleanup.services.report import ConsoleReport

ADMIN_PROJECTION = {"email": 1, "role": 1}


class CleanupRunner:
    """Runs one cleanup pass over already connected repositories"""

    def __init__(
        self,
        customers: RecordRepository,
        vendors: RecordRepository,
        users: RecordRepository,
        policy: CleanupPolicy = CleanupPolicy.CASCADE_BY_VENDOR_REFERENCE,
        report: Optional[ConsoleReport] = None,
        admin_role: str = "admin",
        vendor_role: str = "vendor",
    ):
        self.customers = customers
        self.vendors = vendors
        self.users = users
        self.policy = CleanupPolicy(policy)
        self.report = report or ConsoleReport()
        self.admin_role = admin_role
        self.vendor_role = vendor_role
        self.run_id = str(uuid.uuid4())

    async def run(self) -> CleanupSummary:
        """
        Execute every step in order and return the summary.

        Raises:
            StoreOperationFailure: If any store call fails. Remaining steps
                are skipped.
        """
        summary = CleanupSummary(policy=self.policy, run_id=self.run_id)
        step = "customer_requests"

        logger.info(
            "Cleanup run started",
            correlation_id=self.run_id,
            metadata={"event": "cleanup_started", "policy": self.policy.value}
        )

        try:
            await self._timed(step, self.purge_customer_requests(summary))

            step = "vendor_registrations"
            vendor_ids = await self._timed(step, self.purge_vendor_registrations(summary))

            step = "user_accounts"
            await self._timed(step, self.purge_user_accounts(summary, vendor_ids))

            step = "verification"
            summary.verification = await self._timed(step, self.verify())
        except StoreOperationFailure as e:
            logger.error(
                f"Cleanup aborted during step '{step}'",
                correlation_id=self.run_id,
                error=e,
                metadata={
                    "event": "cleanup_failed",
                    "step": step,
                    "policy": self.policy.value,
                    "deletedSoFar": summary.total_deleted,
                    **e.details
                }
            )
            raise

        self.report.summary(summary)

        logger.info(
            f"Cleanup run finished, {summary.total_deleted} records deleted",
            correlation_id=self.run_id,
            metadata={
                "event": "cleanup_completed",
                "policy": self.policy.value,
                "totalDeleted": summary.total_deleted,
                "clean": summary.verification.is_clean
            }
        )
        return summary

    async def purge_customer_requests(self, summary: CleanupSummary) -> int:
        """Delete every customer request"""
        self.report.step("Customer Requests")

        deleted = await self.customers.delete_many(MatchAll(), correlation_id=self.run_id)
        summary.customer_requests = deleted

        self.report.deleted(deleted, "customer requests")
        self.report.end_step()
        return deleted

    async def purge_vendor_registrations(self, summary: CleanupSummary) -> List:
        """
        Read vendor identities, then delete every vendor registration.

        Returns:
            List: The ``_id`` of each vendor that existed before the delete
        """
        self.report.step("Vendor Data")

        vendors = await self.vendors.find(MatchAll(), projection={"_id": 1},
                                          correlation_id=self.run_id)
        vendor_ids = [vendor["_id"] for vendor in vendors]
        summary.vendors_found = len(vendor_ids)
        self.report.vendors_found(len(vendor_ids))

        deleted = await self.vendors.delete_many(MatchAll(), correlation_id=self.run_id)
        summary.vendor_registrations = deleted

        self.report.deleted(deleted, "vendor registration(s)")
        return vendor_ids

    async def purge_user_accounts(self, summary: CleanupSummary, vendor_ids: List):
        """Delete user accounts according to the configured policy"""
        if self.policy == CleanupPolicy.KEEP_ADMIN_ONLY:
            await self._purge_non_admin_users(summary)
        else:
            await self._purge_vendor_linked_users(summary, vendor_ids)
        self.report.end_step()

    async def _purge_vendor_linked_users(self, summary: CleanupSummary, vendor_ids: List):
        if not vendor_ids:
            summary.vendor_users = 0
            self.report.no_vendors()
            return

        deleted = await self.users.delete_many(In(field="vendor_id", values=vendor_ids),
                                               correlation_id=self.run_id)
        summary.vendor_users = deleted
        self.report.deleted(deleted, "vendor user account(s)")

    async def _purge_non_admin_users(self, summary: CleanupSummary):
        not_admin = NotEquals(field="role", value=self.admin_role)

        deleted = await self.users.delete_many(not_admin, correlation_id=self.run_id)
        summary.non_admin_users = deleted
        self.report.deleted(deleted, "non-admin user account(s)")

        # Second pass for accounts still tied to a vendor
        leftover = AllOf(filters=[IsNotNull(field="vendor_id"), not_admin])
        orphaned = await self.users.delete_many(leftover, correlation_id=self.run_id)
        summary.orphaned_vendor_users = orphaned
        if orphaned:
            self.report.deleted(orphaned, "leftover vendor-linked account(s)")

        summary.remaining_admins = await self.list_admins()
        self.report.admins_remaining(summary.remaining_admins)

    async def list_admins(self) -> List[AdminAccount]:
        documents = await self.users.find(Equals(field="role", value=self.admin_role),
                                          projection=ADMIN_PROJECTION,
                                          correlation_id=self.run_id)
        return [AdminAccount.from_document(doc) for doc in documents]

    async def verify(self) -> VerificationResult:
        """Re-count what is left and collect a warning per non-empty category"""
        result = VerificationResult(
            remaining_customer_requests=await self.customers.count(
                MatchAll(), correlation_id=self.run_id),
            remaining_vendor_registrations=await self.vendors.count(
                MatchAll(), correlation_id=self.run_id),
        )

        if result.remaining_customer_requests > 0:
            result.warnings.append(
                f"{result.remaining_customer_requests} customer request(s) still exist")
        if result.remaining_vendor_registrations > 0:
            result.warnings.append(
                f"{result.remaining_vendor_registrations} vendor(s) still exist")

        if self.policy == CleanupPolicy.KEEP_ADMIN_ONLY:
            result.remaining_non_admin_users = await self.users.count(
                NotEquals(field="role", value=self.admin_role), correlation_id=self.run_id)
            result.remaining_users = await self.users.count(MatchAll(), correlation_id=self.run_id)
            result.admins = await self.list_admins()
            if result.remaining_non_admin_users > 0:
                result.warnings.append(
                    f"{result.remaining_non_admin_users} non-admin user(s) still exist")
        else:
            result.remaining_vendor_users = await self.users.count(
                Equals(field="role", value=self.vendor_role), correlation_id=self.run_id)
            if result.remaining_vendor_users > 0:
                result.warnings.append(
                    f"{result.remaining_vendor_users} vendor user(s) still exist")

        for warning in result.warnings:
            logger.warning(
                f"Verification: {warning}",
                correlation_id=self.run_id,
                metadata={"event": "cleanup_leftovers"}
            )

        self.report.verification(result, self.policy)
        return result

    async def _timed(self, step: str, coro):
        start = time.perf_counter()
        value = await coro
        logger.performance(
            f"cleanup.{step}",
            int((time.perf_counter() - start) * 1000),
            correlation_id=self.run_id
        )
        return value


async def run_cleanup(
    connection: MongoConnection,
    policy: CleanupPolicy,
    config: Config,
    report: Optional[ConsoleReport] = None,
) -> CleanupSummary:
    """
    Connect, run the cleanup, and close the connection exactly once.

    The connection is closed whether the run succeeds or fails; errors are
    reported and re-raised after the close.
    """
    report = report or ConsoleReport()

    try:
        await connection.connect()
        report.connected()

        runner = CleanupRunner(
            customers=RecordRepository(connection.collection(config.customer_collection)),
            vendors=RecordRepository(connection.collection(config.vendor_collection)),
            users=RecordRepository(connection.collection(config.user_collection)),
            policy=policy,
            report=report,
            admin_role=config.admin_role,
            vendor_role=config.vendor_role,
        )
        return await runner.run()
    except Exception as e:
        report.failed(e)
        raise
    finally:
        await connection.close()
        report.closed()
