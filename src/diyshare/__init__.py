"""
DIY Share backend
Share, comment on, like and save DIY projects
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
