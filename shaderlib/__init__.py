"""A shader module system: glsl fragments, includes, defines and compile caching."""

# ruff: noqa: F401, F403

__version__ = "0.1.0"

from . import utils
from .utils import logger
from .core import *
