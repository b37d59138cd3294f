"""
Data models for Target-DNS.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

RECORD_TYPE = "A"
RECORD_TTL = 3600


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK object or a plain mapping."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


@dataclass
class Target:
    """
    An inventory entry: a machine hostname and its IPv4 address.
    """

    hostname: Optional[str]
    ipv4: Optional[str]

    def is_valid(self) -> bool:
        return bool(self.hostname) and bool(self.ipv4)

    @classmethod
    def from_api(cls, obj: Any) -> "Target":
        """
        Build a Target from an inventory API object.

        The address lives at ``ip.ipv4.ip_addr``; any missing level yields None.

        Args:
            obj: SDK object or dict returned by the inventory endpoint

        Returns:
            Target: Parsed target
        """
        ip = _field(obj, "ip")
        ipv4 = _field(ip, "ipv4")
        return cls(hostname=_field(obj, "hostname"), ipv4=_field(ipv4, "ip_addr"))


@dataclass
class ObservedRecord:
    """
    An existing A record in the managed zone.
    """

    id: str
    name: str
    content: str
    type: str = RECORD_TYPE
    ttl: Optional[int] = None
    proxied: bool = False

    @classmethod
    def from_api(cls, obj: Any) -> "ObservedRecord":
        return cls(
            id=_field(obj, "id"),
            name=_field(obj, "name"),
            content=_field(obj, "content"),
            type=_field(obj, "type"),
            ttl=_field(obj, "ttl"),
            proxied=bool(_field(obj, "proxied")),
        )


@dataclass
class CreateOp:
    """
    A record to be posted. Type, TTL and proxy status are fixed.
    """

    name: str
    content: str
    type: str = RECORD_TYPE
    ttl: int = RECORD_TTL
    proxied: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "content": self.content,
            "ttl": self.ttl,
            "proxied": self.proxied,
        }


@dataclass
class DeleteOp:
    """
    A record to be deleted. The provider deletes by id; name is for logs only.
    """

    id: str
    name: str

    def to_payload(self) -> Dict[str, Any]:
        return {"id": self.id}


@dataclass
class Changes:
    """
    Represents changes to be applied to DNS records.
    """

    creates: List[CreateOp] = field(default_factory=list)
    deletes: List[DeleteOp] = field(default_factory=list)
    # Desired names built from more than one inventory entry (last one wins)
    duplicate_names: List[str] = field(default_factory=list)

    def has_changes(self) -> bool:
        """
        Check if there are any changes to be applied.

        Returns:
            bool: True if there are changes, False otherwise
        """
        return bool(self.creates or self.deletes)

    def to_batch_payload(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Shape the changes as a provider batch request body.

        Returns:
            Dict: ``{"posts": [...], "deletes": [...]}``
        """
        return {
            "posts": [op.to_payload() for op in self.creates],
            "deletes": [op.to_payload() for op in self.deletes],
        }

    def describe(self) -> List[str]:
        """
        Human readable description of each change, in application order.

        A delete followed by a create for the same name is reported as an update.

        Returns:
            List[str]: One line per logical change
        """
        created = {op.name: op for op in self.creates}
        replaced = set()
        lines = []
        for op in self.deletes:
            if op.name in created:
                replaced.add(op.name)
                lines.append(
                    f"Updating {op.name} to {created[op.name].content} (old record ID: {op.id})"
                )
            else:
                lines.append(f"Deleting stale record {op.name} (ID: {op.id})")
        for op in self.creates:
            if op.name not in replaced:
                lines.append(f"Adding new record {op.name} with IP {op.content}")
        return lines


@dataclass
class SyncResult:
    """
    Outcome of one reconciliation run. Failed runs raise instead.
    """

    applied: bool
    creates: int = 0
    deletes: int = 0
