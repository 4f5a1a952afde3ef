#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line interface for the SPIRV-Cross build planner.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from . import __version__
from .core.errors import ConstraintViolation, PlannerError
from .core.models import Capability, OptimizeMode
from .emitters.command import CommandEmitter
from .emitters.manifest import ManifestEmitter
from .planner.orchestrator import BuildPlanner
from .utils.config import PlannerConfig, PlannerOptions

EMIT_MODES = ("plan", "manifest", "commands", "build")


def setup_logging(args: argparse.Namespace) -> None:
    """Configure loguru sinks from the command-line options."""
    logger.remove()

    log_level = args.log_level
    if args.verbose and log_level == "INFO":
        log_level = "DEBUG"

    if log_level in ["DEBUG", "TRACE"]:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
    else:
        log_format = (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    logger.add(sys.stderr, level=log_level, format=log_format, colorize=True)

    if args.log_file:
        logger.add(
            args.log_file,
            level=log_level,
            format=log_format,
            rotation="10 MB",
            retention=3,
            compression="gz",
        )

    logger.debug(f"Logging initialized at {log_level} level")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spirv-cross-build",
        description="Plan (and optionally run) a feature-sliced SPIRV-Cross build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the compilation plan for a release static library
  spirv-cross-build

  # Shared debug build without the MSL and C++ backends
  spirv-cross-build --shared --debug --no-msl --no-cpp --emit commands

  # Compile with options from a file
  spirv-cross-build --config spirv-cross-build.toml --emit build -j 8
""",
    )
    parser.add_argument(
        "--version", action="version", version=f"spirv-cross-build v{__version__}"
    )

    features = parser.add_argument_group("Feature options")
    features.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Produce detailed debug symbols (omits -g0)",
    )
    features.add_argument(
        "--shared",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Build SPIRV-Cross as a shared library",
    )
    features.add_argument(
        "--exceptions-to-assertions",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Assert instead of throwing exceptions",
    )
    features.add_argument(
        "--force-stl-types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force STL types instead of STL replacements in certain places",
    )
    for capability in Capability:
        features.add_argument(
            f"--{capability.value}",
            dest=capability.value,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Enable or disable {capability.display_name} support",
        )

    target = parser.add_argument_group("Target options")
    target.add_argument("--target-os", help="Target platform tag (default: host)")
    target.add_argument(
        "--optimize",
        choices=[mode.value for mode in OptimizeMode],
        help="Optimization mode for the emitted artifact",
    )

    output = parser.add_argument_group("Output options")
    output.add_argument(
        "--emit",
        choices=EMIT_MODES,
        default="plan",
        help="What to do with the plan",
    )
    output.add_argument("-o", "--output", type=Path, help="Manifest output file")
    output.add_argument("--config", type=Path, help="Load options from a file")
    output.add_argument(
        "--no-auto-config",
        action="store_true",
        help="Do not search for spirv-cross-build.* configuration files",
    )

    toolchain = parser.add_argument_group("Toolchain options")
    toolchain.add_argument("--source-dir", type=Path, default=Path("."))
    toolchain.add_argument("--build-dir", type=Path, default=Path("build"))
    toolchain.add_argument("--compiler", default="c++")
    toolchain.add_argument("--archiver", default="ar")
    toolchain.add_argument("-j", "--jobs", type=int, help="Parallel compile jobs")

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
    )
    logging_group.add_argument("--log-file", type=Path, help="Also log to this file")
    logging_group.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    if args.emit == "manifest" and not args.output:
        parser.error("--emit manifest requires --output")
    return args


def load_options(args: argparse.Namespace) -> PlannerOptions:
    """Combine file-based options with command-line overrides."""
    if args.config:
        base = PlannerConfig.load_from_file(args.config)
    elif not args.no_auto_config:
        base = PlannerConfig.auto_discover(Path.cwd()) or PlannerOptions()
    else:
        base = PlannerOptions()

    overrides: Dict[str, Any] = {
        name: getattr(args, name, None) for name in PlannerOptions.model_fields
    }
    # --glsl/--no-glsl map onto the inverse no_glsl option
    for capability in Capability:
        enabled = getattr(args, capability.value, None)
        overrides[capability.disable_option] = None if enabled is None else not enabled
    return base.merge(overrides)


def _command_emitter(args: argparse.Namespace, dry_run: bool) -> CommandEmitter:
    kwargs: Dict[str, Any] = {
        "compiler": args.compiler,
        "archiver": args.archiver,
        "dry_run": dry_run,
    }
    if args.jobs:
        kwargs["jobs"] = args.jobs
    return CommandEmitter(args.source_dir, args.build_dir, **kwargs)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args)

    try:
        options = load_options(args)
        flags = options.to_flag_set()
        target = options.to_target()
        planner = BuildPlanner()

        match args.emit:
            case "plan":
                print(planner.plan(flags, target).to_json())
            case "manifest":
                asyncio.run(
                    planner.execute(flags, ManifestEmitter(args.output), target)
                )
            case "commands":
                result = asyncio.run(
                    planner.execute(flags, _command_emitter(args, True), target)
                )
                for cmd in result.commands:
                    print(" ".join(cmd))
            case "build":
                asyncio.run(
                    planner.execute(flags, _command_emitter(args, False), target)
                )
    except ConstraintViolation:
        # already reported by the validator
        return 1
    except PlannerError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
