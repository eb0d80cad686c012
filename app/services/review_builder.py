"""Canonical construction of the review fields sent to the generation gateway.

Both visitor entry points go through here: the star-rating form derives the
four categorical fields from a 1-5 rating, the inline generator passes an
explicit selection. The rating table below is the only place the mapping lives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

RATING_LABELS: Dict[int, str] = {
    1: "Poor",
    2: "Fair",
    3: "Good",
    4: "Very Good",
    5: "Excellent",
}

EXPERIENCE_OPTIONS = ("Excellent", "Good", "Average", "Poor")
PROJECT_TYPE_OPTIONS = (
    "Website Development",
    "AI Automation",
    "Portfolio Site",
    "E-commerce",
    "Landing Page",
    "Other",
)
DELIVERY_OPTIONS = ("Very Fast", "On Time", "Delayed", "Flexible")
COMMUNICATION_OPTIONS = ("Excellent", "Good", "Average", "Poor")
RECOMMEND_OPTIONS = ("Yes", "Maybe", "No")

# legacy rows carry no numeric rating, only the experience label
_LEGACY_STARS = {"Excellent": 5, "Good": 4, "Average": 3}

REQUIRED_GATEWAY_FIELDS = (
    "overallExperience",
    "projectType",
    "delivery",
    "communication",
    "wouldRecommend",
)


@dataclass(frozen=True)
class ReviewFields:
    overall_experience: str
    delivery: str
    communication: str
    would_recommend: str


def rating_label(rating: int) -> str:
    """Label shown next to the stars; empty for 0 (nothing picked yet)."""

    return RATING_LABELS.get(rating, "")


def derive_fields(rating: int) -> ReviewFields:
    if rating not in RATING_LABELS:
        raise ValueError(f"rating must be between 1 and 5, got {rating!r}")
    return ReviewFields(
        overall_experience=RATING_LABELS[rating],
        delivery="On Time" if rating >= 4 else "Flexible",
        communication="Excellent" if rating >= 4 else "Good",
        would_recommend="Yes" if rating >= 3 else "Maybe",
    )


def build_review_fields(
    project_type: str,
    *,
    rating: Optional[int] = None,
    explicit: Optional[ReviewFields] = None,
    optional_comment: str = "",
) -> Dict[str, str]:
    """Return the gateway payload from either a star rating or explicit selections."""

    if (rating is None) == (explicit is None):
        raise ValueError("pass exactly one of rating or explicit")

    fields = derive_fields(rating) if rating is not None else explicit
    return {
        "overallExperience": fields.overall_experience,
        "projectType": project_type,
        "delivery": fields.delivery,
        "communication": fields.communication,
        "optionalComment": optional_comment,
        "wouldRecommend": fields.would_recommend,
    }


def missing_fields(payload: Mapping[str, object]) -> list[str]:
    # empty strings count as missing, same as an absent key
    return [name for name in REQUIRED_GATEWAY_FIELDS if not payload.get(name)]


def star_count(rating: Optional[int], overall_experience: Optional[str] = None) -> int:
    if rating is not None:
        return max(0, min(5, int(rating)))
    return _LEGACY_STARS.get(overall_experience or "", 2)


def star_glyphs(count: int, filled: str = "★", empty: str = "☆") -> str:
    return filled * count + empty * (5 - count)
