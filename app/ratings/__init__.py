"""Customer ratings with masked usernames."""

from .log import Rating, RatingLog, RatingSummary, RatingValidationError, mask_username

__all__ = ["Rating", "RatingLog", "RatingSummary", "RatingValidationError", "mask_username"]
