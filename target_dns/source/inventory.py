"""
Inventory source module for Target-DNS.

This module is responsible for listing the infrastructure targets whose hostnames
should resolve in the internal zone.
"""

import asyncio
import logging
from typing import List

import cloudflare

from target_dns.models.models import Target
from target_dns.utils.errors import FetchError


class InventorySource:
    """
    Source that reads infrastructure targets from the Cloudflare account.
    """

    def __init__(self, client: cloudflare.Cloudflare, account_id: str):
        """
        Initialize an InventorySource.

        Args:
            client: Cloudflare API client
            account_id: Account owning the infrastructure targets
        """
        self.cf = client
        self.account_id = account_id
        self.logger = logging.getLogger("target-dns.source.inventory")

    async def targets(self) -> List[Target]:
        """
        Returns the inventory targets that carry both a hostname and an IPv4 address.

        Returns:
            List[Target]: Usable targets

        Raises:
            FetchError: If the inventory could not be read
        """
        self.logger.debug(
            f"Fetching infrastructure targets for account {self.account_id}"
        )
        try:
            raw_targets = await asyncio.to_thread(
                lambda: list(
                    self.cf.zero_trust.access.infrastructure.targets.list(
                        account_id=self.account_id
                    )
                )
            )
        except cloudflare.APIStatusError as e:
            self.logger.error(
                f"Cloudflare API Error fetching targets: {e} (Status: {e.status_code})"
            )
            raise FetchError(
                f"Failed to fetch targets: {e.status_code} - {e.message}"
            ) from e
        except cloudflare.CloudflareError as e:
            self.logger.error(f"General Cloudflare Error fetching targets: {e}")
            raise FetchError(f"Failed to fetch targets: {e}") from e

        targets = []
        for raw in raw_targets:
            target = Target.from_api(raw)
            if not target.is_valid():
                self.logger.debug(
                    f"Skipping target without hostname or IPv4 address: {raw}"
                )
                continue
            targets.append(target)

        self.logger.info(f"Successfully fetched {len(targets)} targets.")
        return targets
