"""Core base classes for the BX-bot UI server."""

from .component import BaseComponent

__all__ = ["BaseComponent"]
