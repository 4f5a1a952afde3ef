#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core data model, static tables, and error taxonomy for the build planner.
"""

from .models import (
    ArtifactDescriptor,
    ArtifactKind,
    BuildMode,
    BuildRecipe,
    BuildTarget,
    Capability,
    CompilationPlan,
    FlagSet,
    MacroDef,
    MacroStyle,
    OptimizeMode,
    SourceGroup,
)
from .errors import (
    ConfigurationError,
    ConstraintViolation,
    EmitterError,
    ErrorContext,
    PlannerError,
)

__all__ = [
    "ArtifactDescriptor",
    "ArtifactKind",
    "BuildMode",
    "BuildRecipe",
    "BuildTarget",
    "Capability",
    "CompilationPlan",
    "FlagSet",
    "MacroDef",
    "MacroStyle",
    "OptimizeMode",
    "SourceGroup",
    "ConfigurationError",
    "ConstraintViolation",
    "EmitterError",
    "ErrorContext",
    "PlannerError",
]
