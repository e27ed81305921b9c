"""
Routes API par domaine.
"""

from . import card
from . import simulator
from . import static
from . import fallback

__all__ = [
    "card",
    "simulator",
    "static",
    "fallback",
]
