from typing import Optional

import attrs

from src.service.tour_booking.domain.enum.guest import Gender, GuestType


CHILD_AGE_LIMIT = 12


@attrs.define
class Guest:
    name: str = ''
    phone: str = ''
    email: Optional[str] = None
    nid: Optional[str] = None
    emergency_contact: Optional[str] = None
    age: Optional[int] = None
    type: GuestType = GuestType.ADULT
    gender: Gender = Gender.MALE
    seat_id: Optional[str] = None

    @property
    def is_named(self) -> bool:
        """Blank-named rows are placeholders, excluded from pricing and seat counts"""
        return bool(self.name.strip())

    def with_age(self, age: Optional[int]) -> 'Guest':
        """Set age, switching to the child tier under 12 and back to adult when it no longer applies"""
        if age is not None and age < CHILD_AGE_LIMIT:
            return attrs.evolve(self, age=age, type=GuestType.CHILD)
        if self.type is GuestType.CHILD:
            return attrs.evolve(self, age=age, type=GuestType.ADULT)
        return attrs.evolve(self, age=age)
