#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Toolchain flag assembly.

Order matters: the language-standard flag must precede the warning flags on
order-sensitive toolchains, so callers must not reorder the result.
"""

from __future__ import annotations

from typing import List, Tuple

from ..core.models import BuildMode
from ..core.tables import (
    DISABLE_EXCEPTIONS_FLAG,
    LANGUAGE_STANDARD_FLAG,
    NO_DEBUG_SYMBOLS_FLAG,
    WARNING_FLAGS,
)


def assemble_flags(
    build_mode: BuildMode, exceptions_as_assertions: bool
) -> Tuple[str, ...]:
    """Compiler flags for the given build mode and exceptions policy."""
    flags: List[str] = []

    if build_mode == BuildMode.RELEASE:
        flags.append(NO_DEBUG_SYMBOLS_FLAG)

    flags.append(LANGUAGE_STANDARD_FLAG)
    flags.extend(WARNING_FLAGS)

    if exceptions_as_assertions:
        flags.append(DISABLE_EXCEPTIONS_FLAG)

    return tuple(flags)
