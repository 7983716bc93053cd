# backend/schemas/evaluation.py
from typing import List, Optional

from pydantic import Field

from schemas.user import CamelModel


class EvaluationBase(CamelModel):
    new_sources: Optional[List[str]] = None

    # Ratings, 0 when the question was skipped
    overall_activity: int = Field(0, ge=0)
    interest_activity: int = Field(0, ge=0)
    received_faculty_info_clearly: int = Field(0, ge=0)
    would_recommend_next_time: int = Field(0, ge=0)
    activity_diversity: int = Field(0, ge=0)
    perceived_crowd_density: int = Field(0, ge=0)
    has_full_booth_access: int = Field(0, ge=0)
    facility_convenience_rating: int = Field(0, ge=0)
    campus_navigation_rating: int = Field(0, ge=0)
    hesitation_level_after_disaster: int = Field(0, ge=0)
    line_oa_signup_rating: int = Field(0, ge=0)
    design_beauty_rating: int = Field(0, ge=0)

    favorite_booth: Optional[str] = None
    website_improvement_suggestions: Optional[str] = None


class EvaluationCreate(EvaluationBase):
    pass


# Every field optional, only those sent are written.
# Ratings may be left out but not cleared, the columns are NOT NULL.
class EvaluationUpdate(CamelModel):
    new_sources: Optional[List[str]] = None
    overall_activity: int = Field(None, ge=0)
    interest_activity: int = Field(None, ge=0)
    received_faculty_info_clearly: int = Field(None, ge=0)
    would_recommend_next_time: int = Field(None, ge=0)
    activity_diversity: int = Field(None, ge=0)
    perceived_crowd_density: int = Field(None, ge=0)
    has_full_booth_access: int = Field(None, ge=0)
    facility_convenience_rating: int = Field(None, ge=0)
    campus_navigation_rating: int = Field(None, ge=0)
    hesitation_level_after_disaster: int = Field(None, ge=0)
    line_oa_signup_rating: int = Field(None, ge=0)
    design_beauty_rating: int = Field(None, ge=0)
    favorite_booth: Optional[str] = None
    website_improvement_suggestions: Optional[str] = None


class EvaluationResponse(EvaluationBase):
    id: int
    student_id: str


class EvaluationCount(CamelModel):
    count: int
