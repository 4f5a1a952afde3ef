#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cross-capability prerequisite checks.

Every optional code generator builds on the GLSL backend, so disabling GLSL
while keeping any of them enabled is a fatal configuration error.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

from loguru import logger

from ..core.errors import ConstraintViolation
from ..core.models import Capability, FlagSet


class DependencyEdge(NamedTuple):
    """``dependent`` may only be enabled if ``prerequisite`` is enabled too."""

    dependent: Capability
    prerequisite: Capability


# Evaluation order decides which violation is reported first.
DEPENDENCY_EDGES: Tuple[DependencyEdge, ...] = (
    DependencyEdge(Capability.HLSL, Capability.GLSL),
    DependencyEdge(Capability.MSL, Capability.GLSL),
    DependencyEdge(Capability.CPP, Capability.GLSL),
    DependencyEdge(Capability.REFLECT, Capability.GLSL),
)


def find_violation(flags: FlagSet) -> Optional[ConstraintViolation]:
    """
    Return the first violated dependency edge, or None if the flags are valid.

    Violations are not aggregated: only the first edge in ``DEPENDENCY_EDGES``
    order is reported.
    """
    for edge in DEPENDENCY_EDGES:
        if flags.enabled(edge.dependent) and not flags.enabled(edge.prerequisite):
            return ConstraintViolation(edge.dependent, edge.prerequisite)
    return None


def validate(flags: FlagSet) -> None:
    """
    Check capability prerequisites.

    Raises:
        ConstraintViolation: For the first dependent whose prerequisite is off.
    """
    violation = find_violation(flags)
    if violation is not None:
        logger.error(violation.message)
        raise violation
    logger.debug(
        "Capability constraints satisfied: "
        + ", ".join(cap.display_name for cap in flags.enabled_capabilities())
    )
