from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class CandidateProfile(Base):
    __tablename__ = "candidate_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    location = Column(String(100), nullable=True)
    years_of_experience = Column(Integer, nullable=False, default=0)
    skills = Column(Text, nullable=True)  # JSON string list
    bio = Column(Text, nullable=True)
    resume_filename = Column(String(255), nullable=True)
    cv_filename = Column(String(255), nullable=True)
    portfolio = Column(String(255), nullable=True)
    linkedin = Column(String(255), nullable=True)
    github = Column(String(255), nullable=True)
    personal_website = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="candidate_profile")
    education = relationship(
        "EducationEntry",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="EducationEntry.id",
    )
    applications = relationship("Application", back_populates="candidate")


class EducationEntry(Base):
    __tablename__ = "education_entries"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("candidate_profiles.id"), nullable=False)
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field = Column(String(255), nullable=True)
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)
    is_current = Column(Boolean, nullable=False, default=False)

    candidate = relationship("CandidateProfile", back_populates="education")
