"""
Podstudio - multi-persona conversation to podcast renderer.
"""

__version__ = "0.1.0"

from . import models
from . import services

__all__ = ["models", "services"]
