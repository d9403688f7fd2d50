import json

from pydantic import BaseModel, ConfigDict, Field

from ..models.candidate import CandidateProfile


class EducationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    institution: str
    degree: str
    field: str | None = None
    end_year: int | None = None
    is_current: bool = False


class CandidateLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    portfolio: str | None = None
    linkedin: str | None = None
    github: str | None = None
    personal_website: str | None = None


class CandidateSummary(BaseModel):
    """Read-only card data for one applicant."""

    model_config = ConfigDict(frozen=True)

    id: int
    full_name: str
    years_of_experience: int = 0
    location: str | None = None
    bio: str | None = None
    skills: tuple[str, ...] = ()
    education: tuple[EducationSummary, ...] = ()
    links: CandidateLinks = Field(default_factory=CandidateLinks)


def skills_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [str(x).strip() for x in parsed if str(x).strip()]


def summarize_candidate(profile: CandidateProfile) -> CandidateSummary:
    return CandidateSummary(
        id=int(profile.id),
        full_name=profile.full_name,
        years_of_experience=int(profile.years_of_experience or 0),
        location=profile.location,
        bio=profile.bio,
        skills=tuple(skills_list(profile.skills)),
        education=tuple(
            EducationSummary(
                institution=e.institution,
                degree=e.degree,
                field=e.field,
                end_year=e.end_year,
                is_current=bool(e.is_current),
            )
            for e in profile.education
        ),
        links=CandidateLinks(
            portfolio=profile.portfolio,
            linkedin=profile.linkedin,
            github=profile.github,
            personal_website=profile.personal_website,
        ),
    )
