#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Static file and macro tables for the SPIRV-Cross source tree.

These are design-time constants; nothing here is derived at runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .models import Capability, MacroDef

ARTIFACT_NAME = "spirv-cross"

CORE_SOURCES: Tuple[str, ...] = (
    "spirv_cross.cpp",
    "spirv_parser.cpp",
    "spirv_cross_parsed_ir.cpp",
    "spirv_cfg.cpp",
)

C_API_SOURCES: Tuple[str, ...] = ("spirv_cross_c.cpp",)

CAPABILITY_SOURCES: Mapping[Capability, Tuple[str, ...]] = MappingProxyType(
    {
        Capability.GLSL: ("spirv_glsl.cpp",),
        Capability.HLSL: ("spirv_hlsl.cpp",),
        Capability.MSL: ("spirv_msl.cpp",),
        Capability.CPP: ("spirv_cpp.cpp",),
        Capability.REFLECT: ("spirv_reflect.cpp",),
        Capability.UTIL: ("spirv_cross_util.cpp",),
    }
)

CAPABILITY_MACROS: Mapping[Capability, Optional[MacroDef]] = MappingProxyType(
    {
        Capability.GLSL: MacroDef(name="SPIRV_CROSS_C_API_GLSL", value="1"),
        Capability.HLSL: MacroDef(name="SPIRV_CROSS_C_API_HLSL", value="1"),
        Capability.MSL: MacroDef(name="SPIRV_CROSS_C_API_MSL", value="1"),
        Capability.CPP: MacroDef(name="SPIRV_CROSS_C_API_CPP", value="1"),
        Capability.REFLECT: MacroDef(name="SPIRV_CROSS_C_API_REFLECT", value="1"),
        Capability.UTIL: None,
    }
)

FORCE_STL_TYPES_MACRO = MacroDef(name="SPIRV_CROSS_FORCE_STL_TYPES")
EXCEPTIONS_TO_ASSERTIONS_MACRO = MacroDef(name="SPIRV_CROSS_EXCEPTIONS_TO_ASSERTIONS")

EXPORT_MACRO_NAME = "SPVC_PUBLIC_API"
WINDOWS_EXPORT_MACRO = MacroDef(name=EXPORT_MACRO_NAME, value="__declspec(dllexport)")
VISIBILITY_EXPORT_MACRO = MacroDef(
    name=EXPORT_MACRO_NAME, value='__attribute__((visibility("default")))'
)

WINDOWS_FAMILY = frozenset(
    {"windows", "win32", "win64", "mingw", "mingw32", "mingw64", "cygwin", "msys"}
)

# Toolchain flags, in emission order
NO_DEBUG_SYMBOLS_FLAG = "-g0"
LANGUAGE_STANDARD_FLAG = "-std=c++11"
WARNING_FLAGS: Tuple[str, ...] = (
    "-Wall",
    "-Wextra",
    "-Wshadow",
    "-Wno-deprecated-declarations",
)
DISABLE_EXCEPTIONS_FLAG = "-fno-exceptions"

DEFAULT_INCLUDE_PATHS: Tuple[str, ...] = (".",)
