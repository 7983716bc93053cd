# backend/models/evaluation.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from database import Base

# Post-event survey, at most one per student
class StudentEvaluation(Base):
    __tablename__ = "student_evaluations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    student_id = Column(
        String, ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"),
        unique=True, nullable=False, index=True,
    )
    new_sources = Column(JSON, nullable=True)

    # Ratings, the scale is enforced by the survey form
    overall_activity = Column(Integer, nullable=False, default=0)
    interest_activity = Column(Integer, nullable=False, default=0)
    received_faculty_info_clearly = Column(Integer, nullable=False, default=0)
    would_recommend_next_time = Column(Integer, nullable=False, default=0)
    activity_diversity = Column(Integer, nullable=False, default=0)
    perceived_crowd_density = Column(Integer, nullable=False, default=0)
    has_full_booth_access = Column(Integer, nullable=False, default=0)
    facility_convenience_rating = Column(Integer, nullable=False, default=0)
    campus_navigation_rating = Column(Integer, nullable=False, default=0)
    hesitation_level_after_disaster = Column(Integer, nullable=False, default=0)
    line_oa_signup_rating = Column(Integer, nullable=False, default=0)
    design_beauty_rating = Column(Integer, nullable=False, default=0)

    # Free text
    favorite_booth = Column(String, nullable=True)
    website_improvement_suggestions = Column(Text, nullable=True)

    student = relationship("User", lazy="select")
