"""Core prompt composition logic.

This package holds everything that turns choices into text.  Nothing here
touches a display surface or the network.

Architecture Overview
---------------------
1. **Configuration** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with POMPR_ in .env files

2. **Data Model** (selection.py):
   - Selection, Pattern, Option and OptionSet dataclasses

3. **Phrase Rules** (phrases.py):
   - Hex validation, scale words, chroma and locational detection
   - Pattern type vocabulary

4. **Compiler** (compiler.py):
   - Pure, deterministic Selection -> sentence mapping

5. **Randomizer** (randomizer.py) and **Recent Colours** (recent_colors.py):
   - Random selections under the chroma/locational rules
   - Bounded, de-duplicated colour history

6. **Option Source** (options.py):
   - CSV-backed option lists with per-category caching

Usage Example
-------------
    from pomprfun.core import OptionSource, compile_prompt, config, randomize

    options = OptionSource(config.data_dir).load_all()
    selection = randomize(options)
    print(compile_prompt(selection))
"""

from pomprfun.core.compiler import compile_prompt, normalize_punctuation
from pomprfun.core.config import PomprConfig, config
from pomprfun.core.options import OptionSource
from pomprfun.core.randomizer import randomize
from pomprfun.core.recent_colors import remember_color

__all__ = [
    "compile_prompt",
    "normalize_punctuation",
    "OptionSource",
    "randomize",
    "remember_color",
    "PomprConfig",
    "config",
]
