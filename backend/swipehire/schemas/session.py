from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .candidate import skills_list


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    role: str


class EducationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    institution: str
    degree: str
    field: str | None = None
    start_year: int | None = None
    end_year: int | None = None
    is_current: bool = False


class CandidateProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    full_name: str
    email: str
    phone: str | None = None
    location: str | None = None
    years_of_experience: int = 0
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    resume_filename: str | None = None
    cv_filename: str | None = None
    portfolio: str | None = None
    linkedin: str | None = None
    github: str | None = None
    personal_website: str | None = None
    education: list[EducationOut] = Field(default_factory=list)
    updated_at: datetime | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def _parse_skills(cls, v):
        # Stored as a JSON string column.
        if v is None or isinstance(v, str):
            return skills_list(v)
        return v


class HRProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    company_name: str = ""
    company_size: str | None = None
    department: str | None = None


class CandidateSession(BaseModel):
    role: Literal["candidate"] = "candidate"
    user: AccountOut
    candidate_profile: CandidateProfileOut


class HRSession(BaseModel):
    role: Literal["hr"] = "hr"
    user: AccountOut
    hr_profile: HRProfileOut


# Exactly one variant per role; neither carries the other's profile.
AuthSession = Annotated[Union[CandidateSession, HRSession], Field(discriminator="role")]
