#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compilation plan assembly from a validated flag set.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from ..core.models import (
    ArtifactDescriptor,
    CompilationPlan,
    FlagSet,
    MacroDef,
    SourceGroup,
)
from ..core.tables import (
    ARTIFACT_NAME,
    C_API_SOURCES,
    CAPABILITY_MACROS,
    CAPABILITY_SOURCES,
    CORE_SOURCES,
    DEFAULT_INCLUDE_PATHS,
    EXCEPTIONS_TO_ASSERTIONS_MACRO,
    FORCE_STL_TYPES_MACRO,
)


def build_plan(
    flags: FlagSet,
    export_macro: Optional[MacroDef],
    *,
    artifact_name: str = ARTIFACT_NAME,
) -> CompilationPlan:
    """
    Map an already-validated flag set to a compilation plan.

    The flags are trusted: prerequisite checks belong to
    ``validator.validate`` and are not repeated here.

    Args:
        flags: Validated capability and mode selection.
        export_macro: Export annotation from ``export_macro_for``; None for
            static artifacts.
        artifact_name: Base name of the produced library.

    Returns:
        CompilationPlan with the core and C API groups first, then every
        enabled capability group in canonical order.
    """
    groups: List[SourceGroup] = [
        SourceGroup(name="core", sources=CORE_SOURCES),
        SourceGroup(name="c-api", sources=C_API_SOURCES),
    ]
    macros: List[MacroDef] = []

    for capability, sources in CAPABILITY_SOURCES.items():
        if not flags.enabled(capability):
            continue
        macro = CAPABILITY_MACROS[capability]
        groups.append(
            SourceGroup(
                name=capability.value,
                sources=sources,
                capability=capability,
                macro=macro,
            )
        )
        if macro is not None:
            macros.append(macro)

    if flags.use_standard_container_types:
        macros.append(FORCE_STL_TYPES_MACRO)

    if export_macro is not None:
        macros.append(export_macro)

    if flags.exceptions_as_assertions:
        macros.append(EXCEPTIONS_TO_ASSERTIONS_MACRO)

    plan = CompilationPlan(
        groups=tuple(groups),
        macros=tuple(macros),
        artifact=ArtifactDescriptor(kind=flags.artifact_kind, name=artifact_name),
        include_paths=DEFAULT_INCLUDE_PATHS,
    )

    logger.debug(
        f"Planned {len(plan.source_units())} compilation units in groups "
        f"{', '.join(plan.group_names())}"
    )
    return plan
