from typing import List, Optional

import attrs


@attrs.frozen
class TourPackage:
    """Snapshot of the package fields the booking flow reads"""

    id: str
    agency_id: str
    title: str
    price_per_person: int
    destination: str = ''
    couple_price: Optional[int] = None
    child_price: Optional[int] = None
    boarding_points: List[str] = attrs.field(factory=list)
    dropping_points: List[str] = attrs.field(factory=list)
