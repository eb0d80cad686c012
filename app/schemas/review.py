# app/schemas/review.py
from pydantic import BaseModel, EmailStr, Field, conint, constr
from typing import Optional
from datetime import datetime


class GenerateReviewRequest(BaseModel):
    """Form selections forwarded to the language model (camelCase on the wire)."""

    overallExperience: str
    projectType: str
    delivery: str
    communication: str
    optionalComment: Optional[str] = None
    wouldRecommend: str


class GenerateReviewResponse(BaseModel):
    review: str


class ReviewPublish(BaseModel):
    client_name: constr(strip_whitespace=True, min_length=1)
    client_email: Optional[EmailStr] = None
    project_type: constr(strip_whitespace=True, min_length=1)
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    optional_comment: Optional[str] = None
    generated_review: constr(strip_whitespace=True, min_length=1)


class PublicReviewItem(BaseModel):
    id: int
    client_name: str
    project_type: str
    generated_review: str
    overall_experience: str
    rating: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    client_name: str
    client_email: Optional[str]
    overall_experience: str
    project_type: str
    delivery: str
    communication: str
    optional_comment: Optional[str]
    would_recommend: str
    generated_review: str
    rating: Optional[int]
    status: str
    created_at: datetime
    approved_at: Optional[datetime]

    class Config:
        from_attributes = True
