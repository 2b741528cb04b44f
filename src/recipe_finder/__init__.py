"""Recipe Finder: recipe search, favorites and the client state layer."""

__version__ = "0.1.0"
