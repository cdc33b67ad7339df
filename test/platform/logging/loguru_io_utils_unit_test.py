import pytest

from src.platform.logging.loguru_io_config import MASK, MAX_CONTENT_LENGTH, _access_log_level
from src.platform.logging.loguru_io_utils import (
    current_trace_id,
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.value_object.payment_record import PaymentRecord
from test.service.tour_booking.builders import NOW


pytestmark = pytest.mark.unit


class TestMaskSensitive:
    def test_transaction_id_in_attrs_repr_is_masked(self):
        record = PaymentRecord(
            method=PaymentMethod.BKASH,
            transaction_id='8N7A6D5C4B',
            amount=5000,
            paid_at=NOW,
            collected_by='admin-1',
        )

        masked = mask_sensitive(record)

        assert '8N7A6D5C4B' not in masked
        assert f"transaction_id='{MASK}'" in masked

    def test_plain_values_are_returned_unchanged(self):
        data = {'seat_id': 'L-A1'}

        assert mask_sensitive(data) is data

    def test_keyword_masking(self):
        assert should_mask_keyword('guest_nid', '1990123456') == MASK
        assert should_mask_keyword('guest_nid', None) is None
        assert should_mask_keyword('guest_name', 'Karim') == 'Karim'


class TestTruncateContent:
    def test_long_content_is_cut(self):
        truncated = truncate_content('x' * (MAX_CONTENT_LENGTH + 5))

        assert truncated.endswith('(truncated 5 chars)')

    def test_short_content_untouched(self):
        assert truncate_content('short') == 'short'


class TestNormalizeArgsKwargs:
    def test_unknown_kwargs_are_dropped(self):
        def func(a, *, package_id):
            return a, package_id

        args, kwargs = normalize_args_kwargs(func, 1, package_id='pkg-1', extra='x')

        assert args == (1,)
        assert kwargs == {'package_id': 'pkg-1'}


class TestCurrentTraceId:
    def test_empty_outside_a_span(self):
        assert current_trace_id() == ''


class TestAccessLogLevel:
    @pytest.mark.parametrize(
        'status_code,level',
        [
            (201, 'INFO'),
            (409, 'WARNING'),
            (500, 'ERROR'),
        ],
    )
    def test_status_code_sets_level(self, status_code: int, level: str):
        message = f'127.0.0.1 - "POST /api/booking/checkout HTTP/1.1" - {status_code} - 3ms'

        assert _access_log_level(message) == level

    def test_other_messages_keep_their_level(self):
        assert _access_log_level('Started worker-1') is None
