# io/recorder.py
import json
import logging
import queue
import sys
import threading
from typing import Protocol

log = logging.getLogger("kyra_rides.recorder")


class Sink(Protocol):
    def write(self, record) -> None: ...


class SinkWriteError(RuntimeError):
    def __init__(self, failures: list[tuple[str, BaseException]]):
        self.failures = failures
        names = ", ".join(f"{name}: {exc}" for name, exc in failures)
        super().__init__(f"booking sink write failed ({names})")


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp
        self._owned = False

    @classmethod
    def open(cls, path: str) -> "JsonlSink":
        sink = cls(open(path, "a", encoding="utf-8"))
        sink._owned = True
        return sink

    def write(self, record) -> None:
        self.fp.write(json.dumps(record.to_payload(), ensure_ascii=False) + "\n")
        self.fp.flush()

    def close(self) -> None:
        # stdout and caller-supplied streams are left open
        if self._owned and not self.fp.closed:
            self.fp.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class MemorySink:
    def __init__(self):
        self.records: list = []

    def write(self, record) -> None:
        self.records.append(record)


_STOP = object()


# Async sink (non-blocking, drops on overflow)
class AsyncSink:
    def __init__(self, sink: Sink, maxsize: int = 1000):
        self.sink, self.q = sink, queue.Queue(maxsize=maxsize)
        self.dropped = 0
        self.failed = 0
        self._t = threading.Thread(target=self._run, daemon=True)
        self._t.start()

    def write(self, record) -> None:
        try:
            self.q.put_nowait(record)
        except queue.Full:
            self.dropped += 1  # never block checkout
            log.error("async sink full, dropped booking %s", getattr(record, "payment_id", "?"))

    def _run(self):
        while True:
            record = self.q.get()
            if record is _STOP:
                return
            try:
                self.sink.write(record)
            except Exception:
                self.failed += 1
                log.exception("async sink write failed")

    def stop(self, timeout: float = 1.0) -> bool:
        """Flush queued records, then stop the worker.

        Returns False when the worker could not drain within ``timeout``.
        """
        try:
            self.q.put(_STOP, timeout=timeout)
        except queue.Full:
            log.error("async sink still full after %.1fs, %d bookings unflushed", timeout, self.q.qsize())
            return False
        self._t.join(timeout=timeout)
        return not self._t.is_alive()

    def close(self, timeout: float = 1.0) -> None:
        if self.stop(timeout) and hasattr(self.sink, "close"):
            self.sink.close()


class Recorder:
    """Fan a confirmed booking out to every sink, once per payment id.

    Every sink is attempted; failures are collected and raised together so
    the caller can report them without losing the other writes. A payment
    counts as saved per sink, so a retry only reaches the sinks that failed.
    """

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self._saved: dict[str, set[int]] = {}

    def write(self, record) -> None:
        done = self._saved.setdefault(record.payment_id, set())
        pending = [(i, s) for i, s in enumerate(self.sinks) if i not in done]
        if not pending:
            log.info("booking already saved for payment %s", record.payment_id)
            return
        failures = []
        for i, s in pending:
            try:
                s.write(record)
            except Exception as exc:
                failures.append((type(s).__name__, exc))
            else:
                done.add(i)
        if failures:
            raise SinkWriteError(failures)

    def close(self, timeout: float = 1.0) -> None:
        """Drain async sinks and close any files the sinks opened."""
        for s in self.sinks:
            if isinstance(s, AsyncSink):
                s.close(timeout)
            elif hasattr(s, "close"):
                s.close()
