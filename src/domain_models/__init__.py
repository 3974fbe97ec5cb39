"""
Core domain models and configuration schemas for the axnarrator project.
This package contains Pydantic definitions used throughout the system.
"""

from .config import RenderConfig
from .fragments import Fragment
from .manifest import AXNode, AXProperty, AXTree

__all__ = ["AXNode", "AXProperty", "AXTree", "Fragment", "RenderConfig"]
