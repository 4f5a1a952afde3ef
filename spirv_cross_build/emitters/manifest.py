#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Manifest emitter: writes the recipe as JSON for inspection or for an
external build driver.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Union

import aiofiles
from loguru import logger

from ..core.errors import EmitterError, ErrorContext
from ..core.models import BuildRecipe
from .base import ArtifactEmitter, EmitResult, artifact_file_name


class ManifestEmitter(ArtifactEmitter):
    """Writes the build recipe to ``output_path`` as indented JSON."""

    def __init__(self, output_path: Union[Path, str]) -> None:
        self.output_path = Path(output_path)

    async def emit(self, recipe: BuildRecipe) -> EmitResult:
        start_time = time.time()
        logger.info(f"Writing build manifest to {self.output_path}")

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.output_path, "w", encoding="utf-8") as f:
                await f.write(recipe.to_json() + "\n")
        except OSError as e:
            raise EmitterError(
                f"Failed to write build manifest: {e}",
                artifact=str(self.output_path),
                context=ErrorContext(working_directory=self.output_path.parent),
                cause=e,
            ) from e

        logger.success(f"Build manifest written: {self.output_path}")
        return EmitResult(
            success=True,
            artifact=artifact_file_name(recipe.plan.artifact, recipe.target.os),
            execution_time=time.time() - start_time,
        )
