#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pure planning components: validation, plan assembly, platform adaptation
and toolchain flag assembly.
"""

from .validator import DEPENDENCY_EDGES, DependencyEdge, find_violation, validate
from .plan_builder import build_plan
from .platform import export_macro_for, host_platform, is_windows_family
from .toolchain import assemble_flags
from .orchestrator import BuildPlanner, plan_build

__all__ = [
    "DEPENDENCY_EDGES",
    "DependencyEdge",
    "find_violation",
    "validate",
    "build_plan",
    "export_macro_for",
    "host_platform",
    "is_windows_family",
    "assemble_flags",
    "BuildPlanner",
    "plan_build",
]
