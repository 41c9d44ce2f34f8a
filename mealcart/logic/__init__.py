"""Core business logic layer.

Subpackages:
- shopping: weekly shopping list aggregation (units, formatting, categories, aggregator)
"""
__all__ = ["shopping"]
