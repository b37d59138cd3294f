"""
Controller module for Target-DNS.

This module is responsible for running reconciliation: fetching the inventory and the
zone, planning the changes and handing them to the provider in one batch.
"""

import asyncio
import logging
from typing import Any, Dict, List

from target_dns.controller.plan import Plan
from target_dns.models.models import SyncResult


class Controller:
    """
    Controller that coordinates between the inventory source and the DNS provider.
    """

    def __init__(self, source, provider, interval: int = 3600):
        """
        Initialize a Controller.

        Args:
            source: Inventory source component
            provider: DNS provider component
            interval: Seconds between scheduled reconciliations
        """
        self.source = source
        self.provider = provider
        self.interval = interval
        self.logger = logging.getLogger("target-dns.controller")
        # Overlapping triggers wait for the running reconciliation
        self._lock = asyncio.Lock()

    async def run_once(self) -> SyncResult:
        """
        Performs a single reconciliation run.

        Returns:
            SyncResult: What was applied

        Raises:
            TargetDNSError: If fetching or applying failed
        """
        async with self._lock:
            self.logger.info("Starting DNS synchronization process...")

            targets = await self.source.targets()
            existing = await self.provider.records()

            changes = Plan(targets, existing, self.provider.suffix).calculate_changes()

            for name in changes.duplicate_names:
                self.logger.warning(
                    f"Multiple targets map to {name}; using the last one listed"
                )
            for line in changes.describe():
                self.logger.info(f"DNS Change: {line}")

            if not changes.has_changes():
                self.logger.info(
                    "No DNS changes required. Records are already in sync."
                )
                return SyncResult(applied=False)

            self.logger.info(
                f"Applying DNS batch operations: {len(changes.creates)} posts, "
                f"{len(changes.deletes)} deletes."
            )
            applied = await self.provider.apply_changes(changes)
            return SyncResult(
                applied=applied,
                creates=len(changes.creates),
                deletes=len(changes.deletes),
            )

    async def sync_and_list(self) -> List[Dict[str, Any]]:
        """
        Reconcile, then return the zone's records as they stand afterwards.

        Returns:
            List[Dict[str, Any]]: Post-sync records
        """
        await self.run_once()
        return await self.provider.all_records()

    async def run_reconciliation_loop(self) -> None:
        """
        Runs the controller's reconciliation loop at the specified interval.
        """
        self.logger.debug(
            f"Reconciliation loop starting with interval {self.interval} seconds"
        )

        while True:
            try:
                await self.run_once()
                self.logger.info("DNS synchronization completed successfully.")
            except Exception as e:
                self.logger.error(
                    f"Error during scheduled DNS synchronization: {e}", exc_info=True
                )

            await asyncio.sleep(self.interval)
