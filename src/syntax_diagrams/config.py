"""Centralized configuration for syntax-diagrams."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Configuration for the rendering pipeline."""

    unicode: bool = True
    padding: int = 1
    title: bool = True
