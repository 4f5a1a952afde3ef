#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Artifact emitters consuming a finished build recipe.
"""

from .base import ArtifactEmitter, CommandResult, EmitResult, artifact_file_name
from .manifest import ManifestEmitter
from .command import CommandEmitter, OPTIMIZE_FLAGS

__all__ = [
    "ArtifactEmitter",
    "CommandResult",
    "EmitResult",
    "artifact_file_name",
    "ManifestEmitter",
    "CommandEmitter",
    "OPTIMIZE_FLAGS",
]
