"""
Minimal tbDEX resource and message containers used by the fixture factories
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict


def generate_id(kind: str) -> str:
    """Generate a prefixed id, e.g. offering_1b9d6bcd..."""
    return f"{kind}_{uuid.uuid4().hex}"


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC timestamp with millisecond precision"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Offering:
    """Resource published by a PFI describing what it is willing to exchange"""

    kind = "offering"

    def __init__(self, metadata: Dict[str, Any], data: Dict[str, Any]):
        self.metadata = metadata
        self.data = data

    @classmethod
    def create(cls, metadata: Dict[str, Any], data: Dict[str, Any]) -> "Offering":
        """
        Create an offering

        Args:
            metadata: Must contain 'from', the PFI's DID
            data: Offering data
        """
        return cls(
            metadata={
                "from": metadata["from"],
                "kind": cls.kind,
                "id": generate_id(cls.kind),
                "createdAt": utc_timestamp(),
            },
            data=data,
        )

    @property
    def id(self) -> str:
        return self.metadata["id"]

    def to_dict(self) -> Dict[str, Any]:
        return {"metadata": self.metadata, "data": self.data}


class Rfq:
    """Request for quote sent by Alice to a PFI, the first message of an exchange"""

    kind = "rfq"

    def __init__(self, metadata: Dict[str, Any], data: Dict[str, Any]):
        self.metadata = metadata
        self.data = data

    @classmethod
    def create(cls, metadata: Dict[str, Any], data: Dict[str, Any]) -> "Rfq":
        """
        Create an RFQ; its id also becomes the exchange id

        Args:
            metadata: Must contain 'from' and 'to' DIDs
            data: RFQ data
        """
        message_id = generate_id(cls.kind)
        return cls(
            metadata={
                "from": metadata["from"],
                "to": metadata["to"],
                "kind": cls.kind,
                "id": message_id,
                "exchangeId": message_id,
                "createdAt": utc_timestamp(),
            },
            data=data,
        )

    @property
    def id(self) -> str:
        return self.metadata["id"]

    @property
    def exchange_id(self) -> str:
        return self.metadata["exchangeId"]

    def to_dict(self) -> Dict[str, Any]:
        return {"metadata": self.metadata, "data": self.data}
