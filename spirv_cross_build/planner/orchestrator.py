#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Planning pipeline: validate, build the plan, assemble flags, hand off.
"""

from __future__ import annotations

import time
from typing import Optional

from loguru import logger

from ..core.models import BuildRecipe, BuildTarget, FlagSet
from ..core.tables import ARTIFACT_NAME
from ..emitters.base import ArtifactEmitter, EmitResult
from .plan_builder import build_plan
from .platform import export_macro_for
from .toolchain import assemble_flags
from .validator import validate


class BuildPlanner:
    """
    Composes the validator, plan builder, platform adapter and flag assembler.

    A flag set that fails validation never reaches the plan builder, and no
    partial recipe is ever handed to an emitter.
    """

    def __init__(self, artifact_name: str = ARTIFACT_NAME) -> None:
        self.artifact_name = artifact_name

    def plan(
        self, flags: FlagSet, target: Optional[BuildTarget] = None
    ) -> BuildRecipe:
        """
        Compute the full build recipe for ``flags``.

        Raises:
            ConstraintViolation: If a capability prerequisite is not met.
        """
        target = target or BuildTarget()
        validate(flags)

        export_macro = export_macro_for(target.os, flags.artifact_kind)
        plan = build_plan(flags, export_macro, artifact_name=self.artifact_name)
        toolchain_flags = assemble_flags(
            flags.build_mode, flags.exceptions_as_assertions
        )

        logger.debug(
            f"Recipe for {target.os}: {len(plan.macros)} macros, "
            f"flags {' '.join(toolchain_flags)}"
        )
        return BuildRecipe(plan=plan, toolchain_flags=toolchain_flags, target=target)

    async def execute(
        self,
        flags: FlagSet,
        emitter: ArtifactEmitter,
        target: Optional[BuildTarget] = None,
    ) -> EmitResult:
        """Plan and hand the recipe to ``emitter``."""
        start_time = time.time()
        recipe = self.plan(flags, target)

        logger.info(
            f"Handing {recipe.plan.artifact.kind.value} artifact "
            f"'{recipe.plan.artifact.name}' to {emitter.__class__.__name__}"
        )
        result = await emitter.emit(recipe)
        logger.debug(f"Emitter finished in {time.time() - start_time:.2f}s")
        return result


def plan_build(flags: FlagSet, target: Optional[BuildTarget] = None) -> BuildRecipe:
    """Convenience wrapper around ``BuildPlanner().plan``."""
    return BuildPlanner().plan(flags, target)
