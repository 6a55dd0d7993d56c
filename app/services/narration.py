"""
Narration: turn a query and its results into the sentence the agent speaks.

Pure functions; no I/O. The same query and results always yield the same text.
"""

from collections.abc import Sequence

from app.core.config import SUMMARY_HIGHLIGHTS
from app.schemas.search import SearchResult


def highlight_count(results: Sequence[SearchResult]) -> int:
    """Number of leading results read back to the user."""
    return min(SUMMARY_HIGHLIGHTS, len(results))


def summarize_results(query: str, results: Sequence[SearchResult]) -> str:
    """
    Build the spoken summary for a search.

    No results gives a fixed "could not find" sentence. Otherwise the first
    few results become "{title}. {snippet}" fragments joined by single spaces
    after a "Here is what I found" prefix.
    """
    if not results:
        return f"I could not find any results for {query}."
    highlights = " ".join(
        f"{item.title}. {item.snippet}" for item in results[: highlight_count(results)]
    )
    return f"Here is what I found for {query}. {highlights}"
