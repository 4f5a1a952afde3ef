#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration loading for the build planner.

Options use the same names as the command-line flags (``no_glsl``,
``shared``, ...) and may live at the root of the file or under a ``build``
table/section.
"""

from __future__ import annotations

import configparser
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import ConfigurationError, ErrorContext
from ..core.models import BuildTarget, FlagSet, OptimizeMode


class PlannerOptions(BaseModel):
    """User-facing planner options as read from a file or the command line."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    debug: bool = Field(default=False, description="Keep detailed debug symbols")
    shared: bool = Field(default=False, description="Build a shared library")
    exceptions_to_assertions: bool = False
    force_stl_types: bool = False

    no_glsl: bool = False
    no_hlsl: bool = False
    no_msl: bool = False
    no_cpp: bool = False
    no_reflect: bool = False
    no_util: bool = False

    target_os: Optional[str] = Field(
        default=None, description="Target platform tag; host OS when unset"
    )
    optimize: OptimizeMode = OptimizeMode.DEBUG

    def to_flag_set(self) -> FlagSet:
        return FlagSet.from_options(
            debug=self.debug,
            shared=self.shared,
            exceptions_to_assertions=self.exceptions_to_assertions,
            force_stl_types=self.force_stl_types,
            no_glsl=self.no_glsl,
            no_hlsl=self.no_hlsl,
            no_msl=self.no_msl,
            no_cpp=self.no_cpp,
            no_reflect=self.no_reflect,
            no_util=self.no_util,
        )

    def to_target(self) -> BuildTarget:
        if self.target_os:
            return BuildTarget(os=self.target_os, optimize=self.optimize)
        return BuildTarget(optimize=self.optimize)

    def merge(self, overrides: Dict[str, Any]) -> PlannerOptions:
        """Return new options with ``overrides`` applied; None values are ignored."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return PlannerConfig.validate_options(data)


class PlannerConfig:
    """
    Loads ``PlannerOptions`` from JSON, YAML, TOML or INI files.
    """

    _SUPPORTED_EXTENSIONS = {
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".toml": "toml",
        ".ini": "ini",
        ".conf": "ini",
    }

    DEFAULT_BASENAME = "spirv-cross-build"

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> PlannerOptions:
        """
        Load planner options from a file.

        Raises:
            ConfigurationError: If the file is missing, has an unsupported
                format, or contains invalid options.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=config_path,
                context=ErrorContext(working_directory=config_path.parent),
            )

        suffix = config_path.suffix.lower()
        if suffix not in cls._SUPPORTED_EXTENSIONS:
            supported = ", ".join(cls._SUPPORTED_EXTENSIONS)
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. Supported formats: {supported}",
                config_file=config_path,
            )

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_file=config_path,
                cause=e,
            ) from e

        format_type = cls._SUPPORTED_EXTENSIONS[suffix]
        logger.debug(f"Loading {format_type.upper()} configuration from {config_path}")

        match format_type:
            case "json":
                return cls.load_from_json(content, config_path)
            case "yaml":
                return cls.load_from_yaml(content, config_path)
            case "toml":
                return cls.load_from_toml(content, config_path)
            case _:
                return cls.load_from_ini(content, config_path)

    @classmethod
    def load_from_json(
        cls, json_str: str, source_file: Optional[Path] = None
    ) -> PlannerOptions:
        try:
            config_data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON configuration: {e}",
                config_file=source_file,
                context=ErrorContext(
                    additional_info={"line": e.lineno, "column": e.colno}
                ),
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "JSON configuration must be an object/dictionary",
                config_file=source_file,
            )
        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_yaml(
        cls, yaml_str: str, source_file: Optional[Path] = None
    ) -> PlannerOptions:
        try:
            config_data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            error_details = {}
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                error_details.update({"line": mark.line + 1, "column": mark.column + 1})
            raise ConfigurationError(
                f"Invalid YAML configuration: {e}",
                config_file=source_file,
                context=ErrorContext(additional_info=error_details),
            ) from e

        if config_data is None:
            config_data = {}
        elif not isinstance(config_data, dict):
            raise ConfigurationError(
                "YAML configuration must be a mapping/dictionary",
                config_file=source_file,
            )
        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_toml(
        cls, toml_str: str, source_file: Optional[Path] = None
    ) -> PlannerOptions:
        try:
            config_data = tomllib.loads(toml_str)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Invalid TOML configuration: {e}", config_file=source_file
            ) from e
        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_ini(
        cls, ini_str: str, source_file: Optional[Path] = None
    ) -> PlannerOptions:
        parser = configparser.ConfigParser()
        try:
            parser.read_string(ini_str)
        except configparser.Error as e:
            raise ConfigurationError(
                f"Invalid INI configuration: {e}", config_file=source_file
            ) from e

        if "build" not in parser:
            raise ConfigurationError(
                "INI configuration must contain a [build] section",
                config_file=source_file,
            )

        config_data: Dict[str, Any] = dict(parser["build"])
        bool_keys = {
            name
            for name, info in PlannerOptions.model_fields.items()
            if info.annotation is bool
        }
        for key in bool_keys & config_data.keys():
            try:
                config_data[key] = parser.getboolean("build", key)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {key} in INI configuration: {e}",
                    config_file=source_file,
                    invalid_option=key,
                ) from e

        return cls._normalize_config(config_data, source_file)

    @classmethod
    def _normalize_config(
        cls, config_data: Dict[str, Any], source_file: Optional[Path] = None
    ) -> PlannerOptions:
        if "build" in config_data:
            section = config_data["build"]
            if not isinstance(section, dict):
                raise ConfigurationError(
                    "The 'build' section must be a mapping", config_file=source_file
                )
            root = {k: v for k, v in config_data.items() if k != "build"}
            for key in root.keys() & section.keys():
                raise ConfigurationError(
                    f"Option {key} is set both at the root and in the 'build' section",
                    config_file=source_file,
                    invalid_option=key,
                )
            config_data = {**root, **section}
        return cls.validate_options(config_data, source_file)

    @classmethod
    def validate_options(
        cls, config_data: Dict[str, Any], source_file: Optional[Path] = None
    ) -> PlannerOptions:
        """Validate raw option values into ``PlannerOptions``."""
        try:
            return PlannerOptions.model_validate(config_data)
        except ValidationError as e:
            first = e.errors()[0]
            option = ".".join(str(part) for part in first["loc"]) or None
            raise ConfigurationError(
                f"Invalid planner option {option}: {first['msg']}",
                config_file=source_file,
                invalid_option=option,
                cause=e,
            ) from e

    @classmethod
    def get_default_config_files(cls, directory: Path) -> list[Path]:
        """Candidate configuration files in ``directory``, in order of preference."""
        return [
            directory / f"{cls.DEFAULT_BASENAME}{ext}"
            for ext in cls._SUPPORTED_EXTENSIONS
            if (directory / f"{cls.DEFAULT_BASENAME}{ext}").is_file()
        ]

    @classmethod
    def auto_discover(cls, start_directory: Union[Path, str]) -> Optional[PlannerOptions]:
        """
        Search ``start_directory`` and its parents for a configuration file.

        Returns:
            The loaded options, or None if no file was found.
        """
        search_dir = Path(start_directory).resolve()

        for directory in [search_dir, *search_dir.parents]:
            config_files = cls.get_default_config_files(directory)
            if config_files:
                logger.info(f"Auto-discovered configuration file: {config_files[0]}")
                return cls.load_from_file(config_files[0])

        logger.debug("No configuration file auto-discovered")
        return None
