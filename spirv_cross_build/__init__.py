#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SPIRV-Cross Build Planner

Computes the compilation plan for the feature-sliced SPIRV-Cross library:
which source groups to compile, which macros to define, which compiler flags
to apply and whether to produce a static or shared artifact. Capability
prerequisites are checked before anything is planned.
"""

import sys
from loguru import logger

# Package metadata
__version__ = "0.1.0"
__author__ = "Max Qian"
__license__ = "GPL-3.0-or-later"

# Configure loguru with defaults
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level="INFO",
    colorize=True,
)

from .core.models import (  # noqa: E402
    ArtifactDescriptor,
    ArtifactKind,
    BuildMode,
    BuildRecipe,
    BuildTarget,
    Capability,
    CompilationPlan,
    FlagSet,
    MacroDef,
    OptimizeMode,
    SourceGroup,
)
from .core.errors import (  # noqa: E402
    ConfigurationError,
    ConstraintViolation,
    EmitterError,
    PlannerError,
)
from .planner import (  # noqa: E402
    BuildPlanner,
    assemble_flags,
    build_plan,
    export_macro_for,
    find_violation,
    plan_build,
    validate,
)
from .emitters import (  # noqa: E402
    ArtifactEmitter,
    CommandEmitter,
    EmitResult,
    ManifestEmitter,
)
from .utils.config import PlannerConfig, PlannerOptions  # noqa: E402


def get_tool_info() -> dict:
    """
    Get metadata about the spirv_cross_build module.

    Returns:
        dict: Module metadata including name, version, description, author,
              license, supported platforms, available functions and classes.
    """
    return {
        "name": "spirv_cross_build",
        "version": __version__,
        "description": "Feature-dependency validation and compilation planning for SPIRV-Cross",
        "author": __author__,
        "license": __license__,
        "supported": True,
        "platform": ["windows", "linux", "macos"],
        "functions": [
            "validate",
            "find_violation",
            "build_plan",
            "export_macro_for",
            "assemble_flags",
            "plan_build",
            "get_tool_info",
        ],
        "requirements": ["python>=3.11", "loguru", "pydantic>=2", "aiofiles", "pyyaml"],
        "capabilities": [c.value for c in Capability],
        "classes": {
            "FlagSet": "Immutable capability and build-mode selection",
            "CompilationPlan": "Ordered source groups, macros and artifact descriptor",
            "BuildPlanner": "Validate, plan and hand off to an emitter",
            "ManifestEmitter": "Writes the build recipe as JSON",
            "CommandEmitter": "Renders and runs compiler/archiver commands",
            "PlannerConfig": "Loads planner options from configuration files",
        },
    }


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
    "OptimizeMode",
    "SourceGroup",
    "ConfigurationError",
    "ConstraintViolation",
    "EmitterError",
    "PlannerError",
    "BuildPlanner",
    "assemble_flags",
    "build_plan",
    "export_macro_for",
    "find_violation",
    "plan_build",
    "validate",
    "ArtifactEmitter",
    "CommandEmitter",
    "EmitResult",
    "ManifestEmitter",
    "PlannerConfig",
    "PlannerOptions",
    "get_tool_info",
    "__version__",
    "__author__",
    "__license__",
]
