#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the build planner with structured error context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .models import Capability


@dataclass(frozen=True)
class ErrorContext:
    """Context information attached to planner errors."""

    command: Optional[str] = None
    exit_code: Optional[int] = None
    working_directory: Optional[Path] = None
    stderr: Optional[str] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for structured logging."""
        return {
            "command": self.command,
            "exit_code": self.exit_code,
            "working_directory": (
                str(self.working_directory) if self.working_directory else None
            ),
            "stderr": self.stderr,
            "additional_info": self.additional_info,
        }


class PlannerError(Exception):
    """
    Base exception for build planner errors.

    Carries an ``ErrorContext`` so callers (and the CLI) can report the
    failing command or configuration item without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause

        logger.bind(error_context=self.context.to_dict()).debug(
            "{}: {}", self.__class__.__name__, message
        )

    def __str__(self) -> str:
        base_msg = self.message

        if self.context.command:
            base_msg += f"\nCommand: {self.context.command}"

        if self.context.exit_code is not None:
            base_msg += f"\nExit Code: {self.context.exit_code}"

        if self.context.stderr:
            base_msg += f"\nStderr: {self.context.stderr}"

        if self.cause:
            base_msg += f"\nCaused by: {self.cause}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context.to_dict(),
        }


class ConstraintViolation(PlannerError):
    """An enabled capability is missing its required prerequisite."""

    def __init__(self, dependent: Capability, prerequisite: Capability) -> None:
        self.dependent = dependent
        self.prerequisite = prerequisite
        message = (
            f"{dependent.display_name} support requires {prerequisite.display_name} "
            f"support. Skip building {dependent.display_name} with "
            f"{dependent.cli_flag} or disable the {prerequisite.cli_flag} flag."
        )
        super().__init__(
            message,
            context=ErrorContext(
                additional_info={
                    "dependent": dependent.value,
                    "prerequisite": prerequisite.value,
                }
            ),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintViolation):
            return NotImplemented
        return (self.dependent, self.prerequisite) == (
            other.dependent,
            other.prerequisite,
        )

    def __reduce__(self):
        return (self.__class__, (self.dependent, self.prerequisite))

    def __hash__(self) -> int:
        return hash((self.dependent, self.prerequisite))

    def __repr__(self) -> str:
        return (
            f"ConstraintViolation(dependent={self.dependent.value!r}, "
            f"prerequisite={self.prerequisite.value!r})"
        )


class ConfigurationError(PlannerError):
    """Raised for unreadable or invalid planner configuration."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Union[str, Path]] = None,
        invalid_option: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.config_file = Path(config_file) if config_file else None
        self.invalid_option = invalid_option

        additional_info: Dict[str, Any] = {}
        if config_file:
            additional_info["config_file"] = str(config_file)
        if invalid_option:
            additional_info["invalid_option"] = invalid_option

        context = kwargs.pop("context", None) or ErrorContext()
        context.additional_info.update(additional_info)

        super().__init__(message, context=context, **kwargs)


class EmitterError(PlannerError):
    """Raised when an artifact emitter fails to produce the artifact."""

    def __init__(
        self,
        message: str,
        *,
        artifact: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.artifact = artifact

        context = kwargs.pop("context", None) or ErrorContext()
        if artifact:
            context.additional_info["artifact"] = artifact

        super().__init__(message, context=context, **kwargs)
