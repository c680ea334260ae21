# runtime/registries.py
from collections.abc import Callable

from kyra_rides.app.protocols import BookingSink, DistanceProvider
from kyra_rides.config.models import (
    DistanceFixedModel,
    DistanceHaversineModel,
    DistanceUnion,
    RecorderModel,
    SinkJsonlModel,
    SinkMemoryModel,
    SinkUnion,
)
from kyra_rides.io.recorder import AsyncSink, JsonlSink, MemorySink, Recorder
from kyra_rides.services.distance import FixedDistanceProvider, HaversineDistanceProvider

DistanceFactory = Callable[[DistanceUnion], DistanceProvider]
SinkFactory = Callable[[SinkUnion], BookingSink]

_distance_registry: dict[str, DistanceFactory] = {}
_sink_registry: dict[str, SinkFactory] = {}


# ------------------- Distance providers ---------------------------


def register_distance(kind: str):
    def deco(fn: DistanceFactory):
        _distance_registry[kind] = fn
        return fn

    return deco


def make_distance_provider(cfg: DistanceUnion) -> DistanceProvider:
    try:
        factory = _distance_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown distance kind {cfg.kind!r}") from None
    return factory(cfg)


@register_distance("haversine")
def _make_haversine(cfg: DistanceHaversineModel):
    return HaversineDistanceProvider(road_factor=cfg.road_factor)


@register_distance("fixed")
def _make_fixed(cfg: DistanceFixedModel):
    return FixedDistanceProvider(cfg.km)


# ----- Booking sinks --------------------------


def register_sink(kind: str):
    def deco(fn: SinkFactory):
        _sink_registry[kind] = fn
        return fn

    return deco


def make_sink(cfg: SinkUnion) -> BookingSink:
    try:
        factory = _sink_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown sink kind {cfg.kind!r}") from None
    return factory(cfg)


@register_sink("jsonl")
def _make_jsonl(cfg: SinkJsonlModel):
    return JsonlSink.open(cfg.path) if cfg.path else JsonlSink()


@register_sink("memory")
def _make_memory(cfg: SinkMemoryModel):
    return MemorySink()


def make_recorder(cfg: RecorderModel) -> Recorder:
    sinks = [make_sink(s) for s in cfg.sinks]
    if cfg.non_blocking:
        sinks = [AsyncSink(s, maxsize=cfg.queue_size) for s in sinks]
    return Recorder(*sinks)
