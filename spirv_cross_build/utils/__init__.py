#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules for the build planner.
"""

from __future__ import annotations

from .config import PlannerConfig, PlannerOptions

__all__ = ["PlannerConfig", "PlannerOptions"]
