# Copyright (c)
# SPDX-License-Identifier: MIT
"""Prometheus metrics utilities (registry-aware, hot-reload safe).

Counters returned here are bound to the **current**
``prometheus_client.REGISTRY`` and cached per registry, so tests that swap the
default registry get fresh collectors without duplicate-registration errors.

Example:
    record_normalized("exception")
    get_errors_normalized_total().labels(kind="string").inc()
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final

import prometheus_client as prom
from prometheus_client import Counter

from arche_errors.config.settings import get_settings
from arche_errors.domain.enums.signal_kind import SignalKind

_log = logging.getLogger(__name__)

NORMALIZED_KINDS: Final[tuple[str, ...]] = tuple(kind.value for kind in SignalKind)

# Cache keyed by metric name; valid only for the registry held in _registry.
_registry: prom.CollectorRegistry | None = None
_counter_cache: dict[str, Counter] = {}
_lock = threading.RLock()


def _ensure_registry() -> None:
    """Reset caches if the active registry changed."""
    global _registry
    with _lock:
        if _registry is not prom.REGISTRY:
            _counter_cache.clear()
            _registry = prom.REGISTRY


def _lookup_existing_counter(name: str) -> Counter | None:
    """Return a previously-registered ``Counter`` from the active registry.

    Args:
        name: Collector name.

    Returns:
        Counter | None: Existing collector if present and of the correct type.
    """
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, Counter):
                return col
    return None


def _get_or_create_counter(
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
) -> Counter:
    """Get or create a registry-bound ``Counter`` with stable identity.

    Args:
        name: Metric name (snake_case).
        help_text: Human-readable description.
        labelnames: Optional label names tuple.

    Returns:
        Counter: Bound to ``prom.REGISTRY``.
    """
    _ensure_registry()
    with _lock:
        cached = _counter_cache.get(name)
        if isinstance(cached, Counter):
            return cached

        existing = _lookup_existing_counter(name)
        if isinstance(existing, Counter):
            _counter_cache[name] = existing
            return existing

        try:
            c = Counter(name, help_text, labelnames, registry=prom.REGISTRY)
            _counter_cache[name] = c
            return c
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing_counter(name)
                if isinstance(again, Counter):
                    _counter_cache[name] = again
                    return again
            _log.exception("Failed to register Prometheus counter %s", name)
            raise


def get_errors_normalized_total() -> Counter:
    """Return counter for errors produced by the normalizer.

    Labels:
        kind: One of :data:`NORMALIZED_KINDS`.

    Returns:
        Counter: Labelled collector.
    """
    return _get_or_create_counter(
        name="arche_errors_normalized_total",
        help_text="Errors normalized, by input signal kind",
        labelnames=("kind",),
    )


def record_normalized(kind: str) -> None:
    """Increment the normalized-errors counter without ever raising.

    Args:
        kind: Classification of the input signal.
    """
    try:
        if not get_settings().metrics_enabled:
            return
        get_errors_normalized_total().labels(kind=kind).inc()
    except Exception:  # noqa: BLE001
        _log.debug("Failed to record normalized error metric", exc_info=True)
