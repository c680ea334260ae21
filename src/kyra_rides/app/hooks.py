# app/hooks.py
from typing import Protocol

from kyra_rides.app.events import (
    BookingRejected,
    BookingSaved,
    PaymentConfirmed,
    QuoteIssued,
    SinkFailed,
)


class BookingHooks(Protocol):
    def quote_issued(self, ev: QuoteIssued): ...
    def rejected(self, ev: BookingRejected): ...
    def payment_confirmed(self, ev: PaymentConfirmed): ...
    def booking_saved(self, ev: BookingSaved): ...
    def sink_error(self, ev: SinkFailed): ...


class NoopHooks:
    def quote_issued(self, *_, **__):
        pass

    def rejected(self, *_, **__):
        pass

    def payment_confirmed(self, *_, **__):
        pass

    def booking_saved(self, *_, **__):
        pass

    def sink_error(self, *_, **__):
        pass
