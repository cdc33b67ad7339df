from enum import StrEnum


class GuestType(StrEnum):
    ADULT = 'adult'
    COUPLE = 'couple'  # pricing tier, not two physical people
    CHILD = 'child'


class Gender(StrEnum):
    MALE = 'male'
    FEMALE = 'female'
    OTHER = 'other'
