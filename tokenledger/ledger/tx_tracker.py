"""
Transaction dedup tracker.

Gives operations that carry a transaction id at-most-once semantics per caller
within a validity window:

1. sweep: drop the caller's records whose window has elapsed
2. check: reject an id that still has a live record
3. record: after the operation succeeded, remember the id until
   now + storage period

Expiry is lazy. A record is only swept when its caller next submits an
operation with a transaction id, so an expired id can linger in state (and in
queries) until then.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from ..core.errors import ErrorKind, LedgerError

TxKey = Tuple[str, int]


@dataclass
class TxTracker:
    # (caller, tx_id) -> valid_until
    tx_ids: Dict[TxKey, int] = field(default_factory=dict)
    # caller -> tracked tx_ids; kept in sync with tx_ids
    account_to_tx_ids: Dict[str, Set[int]] = field(default_factory=dict)

    def sweep(self, caller: str, now: int) -> List[int]:
        """
        Remove every expired record of caller.

        A record is expired once now >= valid_until.

        Returns:
            Sorted list of removed tx ids
        """
        tracked = self.account_to_tx_ids.get(caller)
        if not tracked:
            return []

        expired = sorted(
            tx_id for tx_id in tracked if self.tx_ids.get((caller, tx_id), 0) <= now
        )
        for tx_id in expired:
            self.tx_ids.pop((caller, tx_id), None)
            tracked.discard(tx_id)

        if not tracked:
            del self.account_to_tx_ids[caller]
        return expired

    def check(self, caller: str, tx_id: int, now: int) -> None:
        """
        Sweep caller's expired records, then reject tx_id if still live.

        Raises:
            LedgerError(TxAlreadyExists): If (caller, tx_id) is within its window
        """
        self.sweep(caller, now)
        if (caller, tx_id) in self.tx_ids:
            raise LedgerError(ErrorKind.TX_ALREADY_EXISTS)

    def record(self, caller: str, tx_id: int, now: int, storage_period: int) -> int:
        """
        Remember (caller, tx_id) until now + storage_period.

        Returns:
            valid_until of the new record
        """
        valid_until = now + storage_period
        self.tx_ids[(caller, tx_id)] = valid_until
        self.account_to_tx_ids.setdefault(caller, set()).add(tx_id)
        return valid_until

    def valid_until(self, caller: str, tx_id: int) -> int:
        """Validity time of a record, 0 when untracked."""
        return self.tx_ids.get((caller, tx_id), 0)

    def tx_ids_for(self, caller: str) -> List[int]:
        return sorted(self.account_to_tx_ids.get(caller, ()))

    def to_dict(self) -> Dict[str, Any]:
        records: Dict[str, Dict[str, int]] = {}
        for (caller, tx_id), valid_until in self.tx_ids.items():
            records.setdefault(caller, {})[str(tx_id)] = valid_until
        return {
            "tx_ids": records,
            "account_to_tx_ids": {
                caller: sorted(ids) for caller, ids in self.account_to_tx_ids.items()
            },
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TxTracker":
        data = data or {}
        tx_ids: Dict[TxKey, int] = {}
        for caller, records in data.get("tx_ids", {}).items():
            for tx_id, valid_until in records.items():
                tx_ids[(caller, int(tx_id))] = int(valid_until)
        return TxTracker(
            tx_ids=tx_ids,
            account_to_tx_ids={
                caller: set(ids) for caller, ids in data.get("account_to_tx_ids", {}).items()
            },
        )
