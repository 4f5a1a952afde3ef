#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Artifact emitter interface and shared result types.

Emitters sit outside the planning core: they receive a finished
``BuildRecipe`` and turn it into files or toolchain invocations.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.models import ArtifactDescriptor, ArtifactKind, BuildRecipe


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Immutable result of one toolchain command."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0
    command: Tuple[str, ...] = ()
    execution_time: float = 0.0
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.execution_time < 0:
            raise ValueError("execution_time cannot be negative")

    @property
    def failed(self) -> bool:
        return not self.success

    @property
    def command_str(self) -> str:
        return " ".join(self.command)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "return_code": self.return_code,
            "command": list(self.command),
            "execution_time": self.execution_time,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True, slots=True)
class EmitResult:
    """Outcome of handing a recipe to an emitter."""

    success: bool
    artifact: Optional[str] = None
    commands: Tuple[Tuple[str, ...], ...] = ()
    outputs: Tuple[CommandResult, ...] = ()
    execution_time: float = 0.0

    @property
    def failed(self) -> bool:
        return not self.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "artifact": self.artifact,
            "commands": [list(cmd) for cmd in self.commands],
            "outputs": [output.to_dict() for output in self.outputs],
            "execution_time": self.execution_time,
        }


def artifact_file_name(artifact: ArtifactDescriptor, platform_tag: str) -> str:
    """
    Platform-specific file name for ``artifact``.

    >>> artifact_file_name(ArtifactDescriptor(kind=ArtifactKind.STATIC), "linux")
    'libspirv-cross.a'
    """
    from ..planner.platform import is_macos, is_windows_family

    if is_windows_family(platform_tag):
        suffix = ".lib" if artifact.kind == ArtifactKind.STATIC else ".dll"
        return f"{artifact.name}{suffix}"

    if artifact.kind == ArtifactKind.STATIC:
        return f"lib{artifact.name}.a"
    if is_macos(platform_tag):
        return f"lib{artifact.name}.dylib"
    return f"lib{artifact.name}.so"


class ArtifactEmitter(ABC):
    """Consumes a build recipe and produces (or describes) the artifact."""

    @abstractmethod
    async def emit(self, recipe: BuildRecipe) -> EmitResult:
        """Hand ``recipe`` to the toolchain or writer behind this emitter."""
        pass
