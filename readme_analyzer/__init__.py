"""README Word Analyzer.

Collects the pull requests of a GitHub repository, fetches the README of
every head repository those pull requests come from, and ranks the most
frequent words across all of them.
"""

__version__ = "1.0.0"
