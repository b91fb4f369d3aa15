"""POMPR-FUN - Deterministic prompt composition from curated option lists."""

__version__ = "1.0.0"

from pomprfun.core.compiler import compile_prompt
from pomprfun.core.config import PomprConfig, config
from pomprfun.core.randomizer import randomize
from pomprfun.core.selection import Option, OptionSet, Pattern, Selection

__all__ = [
    "compile_prompt",
    "randomize",
    "Option",
    "OptionSet",
    "Pattern",
    "Selection",
    "PomprConfig",
    "config",
]
