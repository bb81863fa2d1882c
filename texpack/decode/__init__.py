__all__ = ["flip"]

from . import flip
