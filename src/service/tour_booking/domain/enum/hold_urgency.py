from enum import StrEnum


class HoldUrgency(StrEnum):
    NORMAL = 'normal'
    WARNING = 'warning'
    CRITICAL = 'critical'
    EXPIRED = 'expired'
