from .lenient_plugin import LenientPlugin

__all__ = ["LenientPlugin"]
