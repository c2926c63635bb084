"""Rating aggregation service."""

from recipe_share.services.ratings.service import RatingService, RatingSummary


__all__ = ["RatingService", "RatingSummary"]
