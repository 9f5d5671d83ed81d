"""
Transaction model.

Represents a single pending transaction submitted by a rollup.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Transaction:
    """
    A pending transaction waiting to be sequenced.

    Transactions are immutable once created. The sequencer never
    interprets the payload and never validates the fields; the
    producer is responsible for supplying well-formed values.

    Attributes:
        id: Identifier, expected to be unique within a pool
        origin: Rollup or chain that submitted the transaction
        submitted_at: Logical submission timestamp
        fee_bid: Priority bid, higher means willing to pay more
        payload: Opaque application data
    """

    id: str
    origin: str
    submitted_at: int
    fee_bid: int
    payload: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """
        Create a Transaction from a decoded mapping.

        Args:
            data: Mapping with id, origin, submitted_at, fee_bid and
                  optionally payload

        Returns:
            New Transaction instance
        """
        return cls(
            id=str(data["id"]),
            origin=str(data["origin"]),
            submitted_at=int(data["submitted_at"]),
            fee_bid=int(data["fee_bid"]),
            payload=str(data.get("payload", "")),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "origin": self.origin,
            "submitted_at": self.submitted_at,
            "fee_bid": self.fee_bid,
            "payload": self.payload,
        }
