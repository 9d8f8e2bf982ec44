"""Terminal front end."""

from .render import Renderer

__all__ = ["Renderer"]
