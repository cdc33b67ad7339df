from enum import StrEnum


class PaymentMethod(StrEnum):
    CASH = 'cash'
    BKASH = 'bkash'
    NAGAD = 'nagad'
    CARD = 'card'
    BANK = 'bank'
    OTHER = 'other'

    @property
    def requires_txn(self) -> bool:
        return self is not PaymentMethod.CASH

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.CASH: 'Cash',
    PaymentMethod.BKASH: 'bKash',
    PaymentMethod.NAGAD: 'Nagad',
    PaymentMethod.CARD: 'Card',
    PaymentMethod.BANK: 'Bank Transfer',
    PaymentMethod.OTHER: 'Other',
}
