#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for the SPIRV-Cross build planner.

All planner inputs and outputs are immutable pydantic models so a single
planning pass can never observe a mutated flag set or plan.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Capability(StrEnum):
    """Optional, independently toggleable modules of the library.

    Declaration order is the canonical order used for plan assembly.
    """

    GLSL = "glsl"
    HLSL = "hlsl"
    MSL = "msl"
    CPP = "cpp"
    REFLECT = "reflect"
    UTIL = "util"

    @property
    def display_name(self) -> str:
        """Human-readable name used in diagnostics."""
        names = {
            Capability.GLSL: "GLSL",
            Capability.HLSL: "HLSL",
            Capability.MSL: "MSL",
            Capability.CPP: "CPP",
            Capability.REFLECT: "Reflection",
            Capability.UTIL: "util",
        }
        return names[self]

    @property
    def disable_option(self) -> str:
        """Name of the configuration option that turns this capability off."""
        return f"no_{self.value}"

    @property
    def cli_flag(self) -> str:
        return f"--no-{self.value}"


class BuildMode(StrEnum):
    """Build mode; only affects debug-symbol verbosity."""

    DEBUG = "Debug"
    RELEASE = "Release"


class ArtifactKind(StrEnum):
    """Whether the library is linked statically or dynamically."""

    STATIC = "static"
    SHARED = "shared"


class OptimizeMode(StrEnum):
    """Optimization level requested from the toolchain."""

    DEBUG = "Debug"
    RELEASE_SAFE = "ReleaseSafe"
    RELEASE_FAST = "ReleaseFast"
    RELEASE_SMALL = "ReleaseSmall"


class MacroStyle(StrEnum):
    """Command-line spelling of a preprocessor definition."""

    GNU = "gnu"
    MSVC = "msvc"


class FlagSet(BaseModel):
    """
    Every capability toggle and build-mode choice for one planning pass.

    The model is frozen: assigning to any field after construction raises a
    ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    build_mode: BuildMode = Field(
        default=BuildMode.RELEASE, description="Debug keeps full debug symbols"
    )
    artifact_kind: ArtifactKind = Field(
        default=ArtifactKind.STATIC, description="Static or shared library"
    )
    exceptions_as_assertions: bool = Field(
        default=False, description="Assert instead of throwing exceptions"
    )
    use_standard_container_types: bool = Field(
        default=False, description="Force STL types over internal replacements"
    )

    glsl: bool = Field(default=True, description="GLSL target support")
    hlsl: bool = Field(default=True, description="HLSL target support")
    msl: bool = Field(default=True, description="MSL target support")
    cpp: bool = Field(default=True, description="C++ target support")
    reflect: bool = Field(default=True, description="JSON reflection support")
    util: bool = Field(default=True, description="Util module support")

    @classmethod
    def from_options(
        cls,
        *,
        debug: bool = False,
        shared: bool = False,
        exceptions_to_assertions: bool = False,
        force_stl_types: bool = False,
        no_glsl: bool = False,
        no_hlsl: bool = False,
        no_msl: bool = False,
        no_cpp: bool = False,
        no_reflect: bool = False,
        no_util: bool = False,
    ) -> FlagSet:
        """Build a flag set from the user-facing "disable" style options."""
        return cls(
            build_mode=BuildMode.DEBUG if debug else BuildMode.RELEASE,
            artifact_kind=ArtifactKind.SHARED if shared else ArtifactKind.STATIC,
            exceptions_as_assertions=exceptions_to_assertions,
            use_standard_container_types=force_stl_types,
            glsl=not no_glsl,
            hlsl=not no_hlsl,
            msl=not no_msl,
            cpp=not no_cpp,
            reflect=not no_reflect,
            util=not no_util,
        )

    def enabled(self, capability: Capability) -> bool:
        """Return whether ``capability`` is switched on."""
        return bool(getattr(self, capability.value))

    def enabled_capabilities(self) -> Tuple[Capability, ...]:
        """Enabled capabilities in canonical order."""
        return tuple(cap for cap in Capability if self.enabled(cap))


class MacroDef(BaseModel):
    """A preprocessor definition. An empty value means a bare ``-DNAME``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: str = ""

    def render(self, style: MacroStyle = MacroStyle.GNU) -> str:
        prefix = "/D" if style == MacroStyle.MSVC else "-D"
        if self.value:
            return f"{prefix}{self.name}={self.value}"
        return f"{prefix}{self.name}"

    def __str__(self) -> str:
        return self.render()


class SourceGroup(BaseModel):
    """An ordered group of compilation units gated by one capability."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    sources: Tuple[str, ...]
    capability: Optional[Capability] = None
    macro: Optional[MacroDef] = None

    @field_validator("sources")
    @classmethod
    def validate_sources(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("a source group needs at least one compilation unit")
        return v


class ArtifactDescriptor(BaseModel):
    """Kind and base name of the library the emitter should produce."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ArtifactKind
    name: str = "spirv-cross"


class CompilationPlan(BaseModel):
    """
    What to compile and with which macros for a single build invocation.

    ``groups`` always starts with the core and C API groups, followed by the
    enabled capability groups in canonical order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    groups: Tuple[SourceGroup, ...]
    macros: Tuple[MacroDef, ...]
    artifact: ArtifactDescriptor
    include_paths: Tuple[str, ...] = (".",)
    link_libcpp: bool = True

    def group_names(self) -> Tuple[str, ...]:
        return tuple(group.name for group in self.groups)

    def source_units(self) -> Tuple[str, ...]:
        """All compilation units, flattened in plan order."""
        return tuple(src for group in self.groups for src in group.sources)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _default_os() -> str:
    from ..planner.platform import host_platform

    return host_platform()


class BuildTarget(BaseModel):
    """Target platform and optimization level for the emitted artifact."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    os: str = Field(default_factory=_default_os, description="Platform tag")
    optimize: OptimizeMode = Field(default=OptimizeMode.DEBUG)

    @field_validator("os")
    @classmethod
    def normalize_os(cls, v: str) -> str:
        if not v:
            raise ValueError("platform tag must not be empty")
        return v.lower()


class BuildRecipe(BaseModel):
    """A validated plan together with toolchain flags, ready for an emitter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    plan: CompilationPlan
    toolchain_flags: Tuple[str, ...]
    target: BuildTarget

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
