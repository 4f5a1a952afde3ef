#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Platform-specific symbol export annotations.
"""

from __future__ import annotations

import platform as _platform
from typing import Optional

from ..core.models import ArtifactKind, MacroDef
from ..core.tables import (
    VISIBILITY_EXPORT_MACRO,
    WINDOWS_EXPORT_MACRO,
    WINDOWS_FAMILY,
)


def host_platform() -> str:
    """Lower-cased name of the host operating system."""
    return _platform.system().lower() or "unknown"


def is_windows_family(platform_tag: str) -> bool:
    return platform_tag.strip().lower() in WINDOWS_FAMILY


def is_macos(platform_tag: str) -> bool:
    return platform_tag.strip().lower() in {"macos", "darwin", "macosx"}


def export_macro_for(
    platform_tag: str, artifact_kind: ArtifactKind
) -> Optional[MacroDef]:
    """
    Export-visibility macro for ``artifact_kind`` on ``platform_tag``.

    Static artifacts need no annotation. Shared artifacts get
    ``__declspec(dllexport)`` on the Windows family and the default
    visibility attribute on every other platform, including unknown ones.
    """
    if artifact_kind == ArtifactKind.STATIC:
        return None
    if is_windows_family(platform_tag):
        return WINDOWS_EXPORT_MACRO
    return VISIBILITY_EXPORT_MACRO
