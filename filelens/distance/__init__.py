"""Edit-distance computation."""

from .levenshtein import edit_distance, exceeds_bound

__all__ = ["edit_distance", "exceeds_bound"]
