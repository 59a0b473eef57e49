from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.api.errors import ApiError
from app.dependencies.tickets import RatingLogDep
from app.ratings.log import Rating, RatingValidationError

router = APIRouter(prefix="/api", tags=["ratings"])


class RatingCreateRequest(BaseModel):
    username: str | None = None
    rating: float | None = None
    review: str | None = None


class RatingResponse(BaseModel):
    username: str
    rating: int
    review: str
    at: datetime


class RatingSummaryResponse(BaseModel):
    ratings: list[RatingResponse]
    average: float
    total: int


def _to_response(rating: Rating) -> RatingResponse:
    return RatingResponse(username=rating.masked_username, rating=rating.rating, review=rating.review, at=rating.at)


@router.post("/rating")
async def submit_rating(payload: RatingCreateRequest, ratings: RatingLogDep) -> dict[str, bool]:
    try:
        ratings.submit(payload.username, payload.rating, payload.review)
    except RatingValidationError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    return {"success": True}


@router.get("/ratings", response_model=RatingSummaryResponse)
async def list_ratings(ratings: RatingLogDep) -> RatingSummaryResponse:
    summary = ratings.summary()
    return RatingSummaryResponse(
        ratings=[_to_response(item) for item in summary.ratings],
        average=summary.average,
        total=summary.total,
    )
