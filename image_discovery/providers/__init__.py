"""Concrete adapters for the search and generation ports."""
