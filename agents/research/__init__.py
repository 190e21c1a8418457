"""Reference material gathering for deck generation.

Fetches reference URLs, reads uploaded documents and folds extracted brand
assets into one text blob that is injected into generation prompts.
"""

from .reference_aggregator import ReferenceAggregator, html_to_text

__all__ = [
    "ReferenceAggregator",
    "html_to_text",
]
