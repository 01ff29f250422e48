# tests/arch/test_layering.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Clean Architecture layering guardrail using grimp import graph.

This test builds an import graph for the `arche_errors` package and enforces
a strict layering policy:

    domain         → may depend only on domain
    application    → may depend on {domain, application}
    infrastructure → may depend on {domain, application, infrastructure}

Modules outside the matrix (``config``, ``types``, ``api``) are ignored both
as importers and as targets. ``api`` is where domain services are wired to
infrastructure metrics.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import grimp
from grimp import ImportGraph

ROOT_PACKAGE: Final[str] = "arche_errors"

ALLOWED_DEPENDENCIES: Mapping[str, set[str]] = {
    # Domain is the inner core: it only depends on itself.
    "domain": {"domain"},
    # Application can depend on domain and itself, but not on infra.
    "application": {"domain", "application"},
    # Outer ring.
    "infrastructure": {"domain", "application", "infrastructure"},
}


def _build_graph() -> ImportGraph:
    return grimp.build_graph(ROOT_PACKAGE)


def _layer_for_module(module_name: str) -> str | None:
    """Infer the logical layer from the first component after the root package."""
    if not module_name.startswith(f"{ROOT_PACKAGE}."):
        return None
    top = module_name[len(ROOT_PACKAGE) + 1 :].split(".", 1)[0]
    return top if top in ALLOWED_DEPENDENCIES else None


def _find_layering_violations(graph: ImportGraph) -> list[str]:
    """Scan the graph and return human-readable layering violations."""
    violations: set[str] = set()

    for importer in sorted(graph.modules):
        importer_layer = _layer_for_module(importer)
        if importer_layer is None:
            continue

        allowed_targets = ALLOWED_DEPENDENCIES[importer_layer]
        for imported in graph.find_modules_directly_imported_by(importer):
            imported_layer = _layer_for_module(imported)
            if imported_layer is None:
                continue
            if imported_layer not in allowed_targets:
                violations.add(
                    f"{importer} ({importer_layer}) -> {imported} ({imported_layer}) "
                    "is not allowed by ALLOWED_DEPENDENCIES"
                )

    return sorted(violations)


def test_graph_covers_every_layer() -> None:
    graph = _build_graph()

    assert "arche_errors.domain.services.normalizer" in graph.modules
    assert "arche_errors.application.schemas.dto.error_payload" in graph.modules
    assert "arche_errors.infrastructure.observability.metrics" in graph.modules


def test_api_is_the_metrics_seam() -> None:
    graph = _build_graph()

    assert "arche_errors.infrastructure.observability.metrics" in (
        graph.find_modules_directly_imported_by("arche_errors.api")
    )


def test_layering_respects_clean_architecture() -> None:
    """Ensure that high-level layering rules are respected."""
    graph = _build_graph()
    violations = _find_layering_violations(graph)

    if violations:
        message = "Layering violations detected:\n" + "\n".join(violations)
        raise AssertionError(message)
