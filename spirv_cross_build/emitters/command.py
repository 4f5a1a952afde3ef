#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line toolchain emitter.

Renders one compile command per source unit plus a final archive (static)
or link (shared) command, and optionally runs them with bounded parallelism.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from ..core.errors import EmitterError, ErrorContext
from ..core.models import ArtifactKind, BuildRecipe, OptimizeMode
from ..planner.platform import is_macos, is_windows_family
from .base import ArtifactEmitter, CommandResult, EmitResult, artifact_file_name

CommandRunner = Callable[[Sequence[str]], Awaitable[CommandResult]]

OPTIMIZE_FLAGS: Dict[OptimizeMode, str] = {
    OptimizeMode.DEBUG: "-O0",
    OptimizeMode.RELEASE_SAFE: "-O2",
    OptimizeMode.RELEASE_FAST: "-O3",
    OptimizeMode.RELEASE_SMALL: "-Os",
}


class CommandEmitter(ArtifactEmitter):
    """
    Drives a GCC/Clang-style toolchain from a build recipe.

    Attributes:
        source_dir: Root of the SPIRV-Cross checkout; source units and
            include paths are resolved against it.
        build_dir: Directory receiving object files and the artifact.
        compiler: C++ compiler driver used for compiling and shared linking.
        archiver: Archiver used for static libraries.
        jobs: Maximum number of concurrent compile commands.
        dry_run: Render the commands without running anything.
        run_command: The asynchronous command runner.
    """

    def __init__(
        self,
        source_dir: Union[Path, str] = ".",
        build_dir: Union[Path, str] = "build",
        *,
        compiler: str = "c++",
        archiver: str = "ar",
        jobs: int = os.cpu_count() or 4,
        dry_run: bool = False,
        env_vars: Optional[Dict[str, str]] = None,
        timeout: float = 3600,
        command_runner: Optional[CommandRunner] = None,
    ) -> None:
        self.source_dir = Path(source_dir)
        self.build_dir = Path(build_dir)
        self.compiler = compiler
        self.archiver = archiver
        self.jobs = max(1, jobs)
        self.dry_run = dry_run
        self.env_vars = env_vars or {}
        self.timeout = timeout

        self.run_command = command_runner or self._default_run_command_async

    @property
    def object_dir(self) -> Path:
        return self.build_dir / "obj"

    def object_path(self, source: str, platform_tag: str) -> Path:
        suffix = ".obj" if is_windows_family(platform_tag) else ".o"
        return self.object_dir / f"{Path(source).stem}{suffix}"

    def artifact_path(self, recipe: BuildRecipe) -> Path:
        return self.build_dir / artifact_file_name(
            recipe.plan.artifact, recipe.target.os
        )

    def compile_command(self, recipe: BuildRecipe, source: str) -> Tuple[str, ...]:
        """Compile command for a single source unit."""
        plan = recipe.plan
        target = recipe.target

        cmd: List[str] = [self.compiler, "-c"]
        cmd.extend(recipe.toolchain_flags)
        cmd.append(OPTIMIZE_FLAGS[target.optimize])

        if plan.artifact.kind == ArtifactKind.SHARED and not is_windows_family(
            target.os
        ):
            cmd.append("-fPIC")

        cmd.extend(macro.render() for macro in plan.macros)
        cmd.extend(f"-I{self.source_dir / path}" for path in plan.include_paths)
        cmd.extend(
            [
                str(self.source_dir / source),
                "-o",
                str(self.object_path(source, target.os)),
            ]
        )
        return tuple(cmd)

    def link_command(self, recipe: BuildRecipe) -> Tuple[str, ...]:
        """Archive command for static artifacts, link command for shared ones."""
        plan = recipe.plan
        objects = [
            str(self.object_path(src, recipe.target.os)) for src in plan.source_units()
        ]
        output = str(self.artifact_path(recipe))

        if plan.artifact.kind == ArtifactKind.STATIC:
            return (self.archiver, "rcs", output, *objects)

        cmd = [self.compiler, "-shared", "-o", output, *objects]
        if plan.link_libcpp:
            cmd.append("-lc++" if is_macos(recipe.target.os) else "-lstdc++")
        return tuple(cmd)

    def render_commands(
        self, recipe: BuildRecipe
    ) -> Tuple[Tuple[Tuple[str, ...], ...], Tuple[str, ...]]:
        """All compile commands in plan order, and the final link command."""
        compile_cmds = tuple(
            self.compile_command(recipe, src) for src in recipe.plan.source_units()
        )
        return compile_cmds, self.link_command(recipe)

    async def _default_run_command_async(self, cmd: Sequence[str]) -> CommandResult:
        """Run ``cmd`` as a subprocess and collect its output."""
        cmd_str = " ".join(cmd)
        logger.info(f"Running async: {cmd_str}")

        env = os.environ.copy()
        env.update(self.env_vars)
        start_time = time.time()

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            raise EmitterError(
                f"Toolchain executable not found: {cmd[0]}",
                context=ErrorContext(command=cmd_str),
                cause=e,
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise EmitterError(
                f"Command timed out after {self.timeout}s: {cmd_str}",
                context=ErrorContext(command=cmd_str),
            )
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise

        exit_code = process.returncode or 0
        return CommandResult(
            success=exit_code == 0,
            stdout=stdout.decode("utf-8", errors="replace").strip(),
            stderr=stderr.decode("utf-8", errors="replace").strip(),
            return_code=exit_code,
            command=tuple(cmd),
            execution_time=time.time() - start_time,
        )

    def _check(self, result: CommandResult, artifact: str) -> None:
        if result.failed:
            raise EmitterError(
                f"Command failed with exit code {result.return_code}",
                artifact=artifact,
                context=ErrorContext(
                    command=result.command_str,
                    exit_code=result.return_code,
                    working_directory=self.build_dir,
                    stderr=result.stderr,
                ),
            )

    async def emit(self, recipe: BuildRecipe) -> EmitResult:
        start_time = time.time()
        compile_cmds, link_cmd = self.render_commands(recipe)
        all_cmds = compile_cmds + (link_cmd,)
        artifact = str(self.artifact_path(recipe))

        if self.dry_run:
            for cmd in all_cmds:
                logger.info(" ".join(cmd))
            return EmitResult(
                success=True,
                artifact=artifact,
                commands=all_cmds,
                execution_time=time.time() - start_time,
            )

        self.object_dir.mkdir(parents=True, exist_ok=True)
        semaphore = asyncio.Semaphore(self.jobs)

        async def run_limited(cmd: Tuple[str, ...]) -> CommandResult:
            async with semaphore:
                result = await self.run_command(cmd)
            self._check(result, artifact)
            return result

        logger.info(
            f"Compiling {len(compile_cmds)} units with up to {self.jobs} jobs"
        )
        # the first failing compile cancels the rest
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(run_limited(cmd)) for cmd in compile_cmds]
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None
        compile_results = [task.result() for task in tasks]

        link_result = await self.run_command(link_cmd)
        self._check(link_result, artifact)

        logger.success(f"Built {artifact}")
        return EmitResult(
            success=True,
            artifact=artifact,
            commands=all_cmds,
            outputs=tuple(compile_results) + (link_result,),
            execution_time=time.time() - start_time,
        )
