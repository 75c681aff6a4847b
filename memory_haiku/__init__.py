"""Turn a spoken or typed memory into strict 5-7-5 haiku."""

from .core import HaikuComposer, HaikuResult, compose_haiku, count_575

__version__ = "0.1.0"

__all__ = ["HaikuComposer", "HaikuResult", "compose_haiku", "count_575", "__version__"]
