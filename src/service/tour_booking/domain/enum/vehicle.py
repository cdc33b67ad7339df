from enum import StrEnum


class VehicleCategory(StrEnum):
    BUS = 'bus'
    MICROBUS = 'microbus'
    HIACE = 'hiace'
    CAR = 'car'


class AcType(StrEnum):
    AC = 'ac'
    NON_AC = 'non_ac'


class BusBrand(StrEnum):
    HINO = 'hino'
    MERCEDES = 'mercedes'
    VOLVO = 'volvo'
    SCANIA = 'scania'
    ASHOK_LEYLAND = 'ashok_leyland'
    OTHER = 'other'
