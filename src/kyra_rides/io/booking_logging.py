# io/booking_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from kyra_rides.app.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="kyra_rides", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class BookingLogging(NoopHooks):
    """
    One place to shape and emit structured logs for the booking lifecycle.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    def _shape_event(self, ev) -> dict:
        data = asdict(ev) if is_dataclass(ev) else {}
        if not self.debug:
            # phone is PII; keep the last four digits unless debugging
            phone = data.get("phone")
            if phone:
                data["phone"] = "******" + phone[-4:]
        return data

    # --------------------------------------------------------

    def quote_issued(self, ev):
        self._emit("INFO", "quote_issued", **self._shape_event(ev))

    def rejected(self, ev):
        self._emit("WARNING", "booking_rejected", **self._shape_event(ev))

    def payment_confirmed(self, ev):
        self._emit("INFO", "payment_confirmed", **self._shape_event(ev))

    def booking_saved(self, ev):
        self._emit("INFO", "booking_saved", **self._shape_event(ev))

    def sink_error(self, ev):
        self._emit("ERROR", "sink_error", **self._shape_event(ev))
