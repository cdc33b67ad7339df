from typing import Dict, List

import attrs


@attrs.define
class BulkSeatResult:
    """Per-seat outcome of a bulk block/unblock; seats succeed or fail independently"""

    succeeded_seat_ids: List[str] = attrs.field(factory=list)
    failed_seats: Dict[str, str] = attrs.field(factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed_seats

    def record_success(self, seat_id: str) -> None:
        self.succeeded_seat_ids.append(seat_id)

    def record_failure(self, seat_id: str, reason: str) -> None:
        self.failed_seats[seat_id] = reason
