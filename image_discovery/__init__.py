"""Relevance-scored image discovery for articles.

Given an article's title and body, finds (or, failing that, generates) a
single representative image through a three-level escalating search.
"""

__version__ = "0.1.0"
