"""Desktop Index - local application index.

Discovers installed `.desktop` descriptor files, caches a snapshot of
them and answers substring queries against it.
"""

from .core import DesktopEntry, QueryEngine, SearchResult
from .version import load_version

__version__ = load_version()

__all__ = [
    "DesktopEntry",
    "QueryEngine",
    "SearchResult",
    "__version__",
]
