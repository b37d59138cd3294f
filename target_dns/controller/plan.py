"""
Plan module for Target-DNS.

This module is responsible for calculating the changes needed to bring the zone's
A records in line with the inventory.
"""

from typing import Dict, List, Tuple

from target_dns.models.models import (
    Changes,
    CreateOp,
    DeleteOp,
    ObservedRecord,
    Target,
)


class Plan:
    """
    Plan calculates the creates and deletes needed to converge the zone on the inventory.

    The calculation is pure: no I/O and no logging. Callers log from the returned Changes.
    """

    def __init__(
        self, targets: List[Target], existing: List[ObservedRecord], suffix: str
    ):
        """
        Initialize a Plan.

        Args:
            targets: Inventory targets, possibly with missing hostname or address
            existing: Observed A records, already filtered to the managed suffix
            suffix: Managed DNS suffix appended to each hostname
        """
        self.targets = targets
        self.existing = existing
        self.suffix = suffix

    def calculate_changes(self) -> Changes:
        """
        Calculate the changes needed to bring the zone in line with the inventory.

        Returns:
            Changes: Changes to be applied
        """
        changes = Changes()

        desired = self._desired_map(changes.duplicate_names)

        # Working copy; entries are removed as desired names account for them
        observed: Dict[str, ObservedRecord] = {
            record.name: record for record in self.existing
        }

        for name, ip in desired.items():
            record = observed.pop(name, None)
            if record is None:
                changes.creates.append(CreateOp(name=name, content=ip))
            elif record.content != ip:
                changes.deletes.append(DeleteOp(id=record.id, name=name))
                changes.creates.append(CreateOp(name=name, content=ip))

        # Anything left was not claimed by a target
        for name, record in observed.items():
            changes.deletes.append(DeleteOp(id=record.id, name=name))

        return changes

    def _desired_map(self, duplicates: List[str]) -> Dict[str, str]:
        """
        Map fully-qualified record name to IPv4 address. Last target wins on duplicates.

        Args:
            duplicates: Collects names that were seen more than once

        Returns:
            Dict[str, str]: Desired name to address mapping
        """
        desired: Dict[str, str] = {}
        for target in self.targets:
            if not target.is_valid():
                continue
            name = self.dns_name(target.hostname, self.suffix)
            if name in desired and name not in duplicates:
                duplicates.append(name)
            desired[name] = target.ipv4
        return desired

    @staticmethod
    def dns_name(hostname: str, suffix: str) -> str:
        return f"{hostname}.{suffix}"


def reconcile(
    targets: List[Target], existing: List[ObservedRecord], suffix: str
) -> Tuple[List[CreateOp], List[DeleteOp]]:
    """
    Compute the creates and deletes that converge ``existing`` on ``targets``.

    Args:
        targets: Inventory targets
        existing: Observed A records under the suffix
        suffix: Managed DNS suffix

    Returns:
        Tuple[List[CreateOp], List[DeleteOp]]: Creates and deletes
    """
    changes = Plan(targets, existing, suffix).calculate_changes()
    return changes.creates, changes.deletes
