"""Option source: curated option lists loaded from CSV files.

Each category (scenes, characters, actions, backgrounds) lives in its own
CSV file inside the data directory::

    data/csv/
    ├── scenes.csv
    ├── characters.csv
    ├── actions.csv
    └── backgrounds.csv

Each file starts with a header row and has two columns::

    name,description
    on a beach,sandy shoreline at golden hour
    in an airport terminal,busy departure hall

Blank lines are ignored everywhere, including before the header, and rows
with an empty name are skipped.  A missing or unreadable file is not
fatal: the category degrades to an empty list and the dropdowns and the
randomizer simply offer no choices for it.

Caching
-------
Parsed lists are cached per category after the first read.  Call
clear_cache() if the CSV files change while the server is running.
"""

import csv
import logging
from pathlib import Path

from .selection import OPTION_CATEGORIES, Option, OptionSet

logger = logging.getLogger(__name__)


class OptionSource:
    """Load option lists from a directory of CSV files.

    Attributes
    ----------
    data_dir : Path
        Directory containing ``{category}.csv`` files
    _cache : dict
        Cache of parsed options (category -> list of Option)

    Examples
    --------
        >>> source = OptionSource(Path("data/csv"))
        >>> [option.name for option in source.load_options("characters")]
        ['a surfer', 'a detective', 'a young chef']
    """

    def __init__(self, data_dir: Path):
        """
        Initialize the option source.

        Args:
            data_dir: Directory containing the category CSV files
        """
        self.data_dir = Path(data_dir)
        self._cache: dict[str, list[Option]] = {}

    def path_for(self, category: str) -> Path:
        """Return the CSV path for a category."""
        return self.data_dir / f"{category}.csv"

    def load_options(self, category: str) -> list[Option]:
        """Load the options for one category.

        Args:
            category: One of ``scenes``, ``characters``, ``actions``,
                ``backgrounds``

        Returns:
            Options in file order, or an empty list if the category is unknown
            or its file cannot be read
        """
        if category not in OPTION_CATEGORIES:
            logger.error(f"Unknown option category: {category}")
            return []

        if category in self._cache:
            return self._cache[category]

        path = self.path_for(category)
        if not path.exists():
            logger.warning(f"Option file not found: {path}")
            return []

        try:
            with open(path, encoding="utf-8", newline="") as f:
                options = self._parse_rows(csv.reader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            logger.error(f"Error reading option file {path}: {e}")
            return []

        logger.info(f"Loaded {len(options)} {category} from {path}")
        self._cache[category] = options
        return options

    @staticmethod
    def _parse_rows(rows) -> list[Option]:
        options = []
        header_seen = False
        for row in rows:
            if not any(cell.strip() for cell in row):
                continue
            # First non-blank row is the header
            if not header_seen:
                header_seen = True
                continue
            name = row[0].strip()
            if not name:
                continue
            desc = row[1].strip() if len(row) > 1 else ""
            options.append(Option(name=name, desc=desc))
        return options

    def load_all(self) -> OptionSet:
        """Load every category into an OptionSet."""
        return OptionSet(**{category: self.load_options(category) for category in OPTION_CATEGORIES})

    def clear_cache(self):
        """Clear the parsed option cache."""
        self._cache.clear()
