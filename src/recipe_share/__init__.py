"""Recipe Share API.

REST backend for publishing, commenting on, rating and bookmarking recipes.
"""

__version__ = "1.0.0"
