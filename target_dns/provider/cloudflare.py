"""
Cloudflare provider module for Target-DNS.

This module is responsible for reading the managed zone and submitting batches of
DNS record changes through the Cloudflare API.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import cloudflare

from target_dns.models.models import RECORD_TYPE, Changes, ObservedRecord
from target_dns.utils.errors import ApplyError, ConfigurationError, FetchError


def build_client(
    api_token: Optional[str] = None,
    user_email: Optional[str] = None,
    api_key: Optional[str] = None,
) -> cloudflare.Cloudflare:
    """
    Create a Cloudflare client from an API token or an email + global API key pair.

    Args:
        api_token: Scoped API token
        user_email: Account email used with the global API key
        api_key: Global API key

    Returns:
        cloudflare.Cloudflare: Configured client
    """
    if api_token:
        return cloudflare.Cloudflare(api_token=api_token)
    if user_email and api_key:
        return cloudflare.Cloudflare(api_email=user_email, api_key=api_key)
    raise ConfigurationError(
        "Cloudflare API credentials are not set: provide an API token or USER_EMAIL and API_KEY"
    )


class CloudflareProvider:
    """
    Provider that interfaces with the Cloudflare API for a single zone.
    """

    def __init__(
        self,
        client: cloudflare.Cloudflare,
        zone_id: str,
        suffix: str,
        dry_run: bool = False,
    ):
        """
        Initialize a CloudflareProvider.

        Args:
            client: Cloudflare API client
            zone_id: Zone holding the managed records
            suffix: Managed DNS suffix; only names ending in ".<suffix>" are touched
            dry_run: Whether to run in dry-run mode
        """
        self.cf = client
        self.zone_id = zone_id
        self.suffix = suffix
        self.dry_run = dry_run
        self.logger = logging.getLogger("target-dns.provider.cloudflare")

    async def all_records(self) -> List[Dict[str, Any]]:
        """
        Returns every DNS record in the zone as plain dicts.

        Returns:
            List[Dict[str, Any]]: Records as returned by the API

        Raises:
            FetchError: If the zone could not be read
        """
        return [self._to_dict(record) for record in await self._list_records()]

    async def records(self) -> List[ObservedRecord]:
        """
        Returns the A records under the managed suffix.

        Returns:
            List[ObservedRecord]: Managed records

        Raises:
            FetchError: If the zone could not be read
        """
        records = []
        for raw in await self._list_records():
            record = ObservedRecord.from_api(raw)
            if record.type != RECORD_TYPE or not self.is_managed(record.name):
                continue
            records.append(record)

        self.logger.info(f"Found {len(records)} existing relevant A records.")
        return records

    def is_managed(self, name: Optional[str]) -> bool:
        return bool(name) and name.endswith(f".{self.suffix}")

    async def apply_changes(self, changes: Changes) -> bool:
        """
        Submits all creates and deletes in one batch request.

        Args:
            changes: Changes to apply

        Returns:
            bool: True if a batch was submitted, False if there was nothing to send

        Raises:
            ApplyError: If the batch request failed
        """
        if not changes.has_changes():
            self.logger.info("No DNS batch operations to perform.")
            return False

        payload = changes.to_batch_payload()

        if self.dry_run:
            self.logger.info(
                f"Dry run mode, not applying batch: {json.dumps(payload, indent=2)}"
            )
            return False

        self.logger.debug(
            f"Sending batch DNS update payload: {json.dumps(payload, indent=2)}"
        )
        try:
            response = await asyncio.to_thread(
                self.cf.dns.records.batch,
                zone_id=self.zone_id,
                posts=payload["posts"],
                deletes=payload["deletes"],
            )
        except cloudflare.APIStatusError as e:
            self.logger.error(
                f"Batch DNS update failed: {e} (Status: {e.status_code}, Body: {e.body})"
            )
            raise ApplyError(
                f"Failed to batch update DNS records: {e.status_code} - {e.message}"
            ) from e
        except cloudflare.CloudflareError as e:
            self.logger.error(f"General Cloudflare Error during batch update: {e}")
            raise ApplyError(f"Failed to batch update DNS records: {e}") from e

        posted = len(getattr(response, "posts", None) or [])
        deleted = len(getattr(response, "deletes", None) or [])
        self.logger.info(
            f"Batch DNS update successful: {posted} records created, {deleted} records deleted"
        )
        return True

    async def _list_records(self) -> List[Any]:
        try:
            # The SDK client is synchronous; keep the event loop free for triggers
            return await asyncio.to_thread(
                lambda: list(
                    self.cf.dns.records.list(zone_id=self.zone_id, per_page=100)
                )
            )
        except cloudflare.APIStatusError as e:
            self.logger.error(
                f"Cloudflare API Error fetching records for zone {self.zone_id}: {e} (Status: {e.status_code})"
            )
            raise FetchError(
                f"Failed to fetch DNS records: {e.status_code} - {e.message}"
            ) from e
        except cloudflare.CloudflareError as e:
            self.logger.error(
                f"General Cloudflare Error fetching records for zone {self.zone_id}: {e}"
            )
            raise FetchError(f"Failed to fetch DNS records: {e}") from e

    @staticmethod
    def _to_dict(record: Any) -> Dict[str, Any]:
        if isinstance(record, dict):
            return record
        # SDK records are pydantic models
        return record.model_dump(mode="json", exclude_none=True)

