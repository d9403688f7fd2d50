"""Demo accounts, jobs and applications for a fresh in-memory store."""
import json
import logging

from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.candidate import CandidateProfile, EducationEntry
from ..models.chat import ChatConversation, ChatMessage
from ..models.hr_profile import HRProfile
from ..models.job import Job
from ..models.user import User
from ..utils.security import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
HR_EMAIL = "hr.manager@techcorp.com"

CANDIDATES = [
    {
        "email": "john.doe@example.com",
        "full_name": "John Doe",
        "location": "San Francisco, CA",
        "years_of_experience": 5,
        "skills": ["React", "TypeScript", "Node.js", "PostgreSQL"],
        "bio": "Full-stack engineer who enjoys shipping product features end to end.",
        "github": "https://github.com/johndoe",
        "linkedin": "https://linkedin.com/in/johndoe",
        "education": [
            {"institution": "UC Berkeley", "degree": "B.S.", "field": "Computer Science", "start_year": 2012, "end_year": 2016},
        ],
    },
    {
        "email": "jane.smith@example.com",
        "full_name": "Jane Smith",
        "location": "Austin, TX",
        "years_of_experience": 7,
        "skills": ["Python", "Django", "AWS", "Docker"],
        "bio": "Backend engineer focused on reliable APIs and cloud infrastructure.",
        "portfolio": "https://janesmith.dev",
        "education": [
            {"institution": "University of Texas", "degree": "M.S.", "field": "Software Engineering", "start_year": 2014, "end_year": 2016},
        ],
    },
    {
        "email": "alex.chen@example.com",
        "full_name": "Alex Chen",
        "location": "Remote",
        "years_of_experience": 3,
        "skills": ["Figma", "UI/UX", "React", "Design Systems"],
        "bio": "Product designer who codes.",
        "personal_website": "https://alexchen.design",
        "education": [
            {"institution": "Rhode Island School of Design", "degree": "B.F.A.", "field": "Graphic Design", "start_year": 2015, "end_year": 2019},
        ],
    },
    {
        "email": "maria.garcia@example.com",
        "full_name": "Maria Garcia",
        "location": "New York, NY",
        "years_of_experience": 2,
        "skills": ["Python", "Pandas", "SQL", "Machine Learning"],
        "bio": "Data scientist finishing a part-time master's degree.",
        "linkedin": "https://linkedin.com/in/mariagarcia",
        "education": [
            {"institution": "Columbia University", "degree": "M.S.", "field": "Data Science", "start_year": 2023, "is_current": True},
        ],
    },
]

JOBS = [
    {
        "title": "Senior Frontend Engineer",
        "description": "Build the candidate-facing web app with React and TypeScript.",
        "department": "Engineering",
        "location": "San Francisco, CA",
        "required_skills": ["React", "TypeScript", "CSS"],
        "min_experience": 4,
        "salary_min": 140000,
        "salary_max": 180000,
        "applicants": ["john.doe@example.com", "jane.smith@example.com", "alex.chen@example.com"],
    },
    {
        "title": "Data Analyst",
        "description": "Turn hiring funnel data into weekly insights for the leadership team.",
        "department": "Analytics",
        "location": "New York, NY",
        "required_skills": ["SQL", "Python"],
        "min_experience": 1,
        "salary_min": 90000,
        "salary_max": 120000,
        "applicants": ["maria.garcia@example.com", "jane.smith@example.com"],
    },
]


def _create_user(db: Session, *, email: str, name: str, role: str) -> User:
    user = User(email=email, name=name, role=role, password=hash_password(DEMO_PASSWORD))
    db.add(user)
    db.flush()
    return user


def seed_demo_data(db: Session) -> bool:
    """Insert the demo data set. Returns False when the store already has users."""
    if db.query(User).first():
        logger.info("Store already populated; skipping demo data")
        return False

    hr_user = _create_user(db, email=HR_EMAIL, name="Sarah Johnson", role="hr")
    hr = HRProfile(user_id=hr_user.id, company_name="TechCorp", company_size="201-500", department="Talent Acquisition")
    db.add(hr)
    db.flush()

    profiles: dict[str, CandidateProfile] = {}
    for entry in CANDIDATES:
        user = _create_user(db, email=entry["email"], name=entry["full_name"], role="candidate")
        profile = CandidateProfile(
            user_id=user.id,
            full_name=entry["full_name"],
            email=entry["email"],
            location=entry.get("location"),
            years_of_experience=entry.get("years_of_experience", 0),
            skills=json.dumps(entry.get("skills", [])),
            bio=entry.get("bio"),
            portfolio=entry.get("portfolio"),
            linkedin=entry.get("linkedin"),
            github=entry.get("github"),
            personal_website=entry.get("personal_website"),
            education=[
                EducationEntry(
                    institution=e["institution"],
                    degree=e["degree"],
                    field=e.get("field"),
                    start_year=e.get("start_year"),
                    end_year=e.get("end_year"),
                    is_current=bool(e.get("is_current", False)),
                )
                for e in entry.get("education", [])
            ],
        )
        db.add(profile)
        db.flush()
        profiles[entry["email"]] = profile

    first_application = None
    for entry in JOBS:
        job = Job(
            hr_id=hr.id,
            title=entry["title"],
            description=entry["description"],
            department=entry["department"],
            location=entry["location"],
            required_skills=json.dumps(entry["required_skills"]),
            min_experience=entry["min_experience"],
            salary_min=entry["salary_min"],
            salary_max=entry["salary_max"],
            status="active",
        )
        db.add(job)
        db.flush()
        for email in entry["applicants"]:
            application = Application(job_id=job.id, candidate_id=profiles[email].id, status="applied")
            db.add(application)
            db.flush()
            if first_application is None:
                first_application = application

    if first_application is not None:
        conversation = ChatConversation(
            hr_id=hr.id,
            candidate_id=first_application.candidate_id,
            job_id=first_application.job_id,
            application_id=first_application.id,
            last_message="Thanks! Looking forward to it.",
        )
        db.add(conversation)
        db.flush()
        candidate_user_id = profiles[CANDIDATES[0]["email"]].user_id
        db.add_all(
            [
                ChatMessage(
                    conversation_id=conversation.id,
                    sender_id=hr_user.id,
                    sender_role="hr",
                    message="Hi John, we'd love to set up a quick intro call.",
                    read=True,
                ),
                ChatMessage(
                    conversation_id=conversation.id,
                    sender_id=candidate_user_id,
                    sender_role="candidate",
                    message="Thanks! Looking forward to it.",
                ),
            ]
        )

    db.commit()
    logger.info("Seeded demo data: 1 HR manager, %d candidates, %d jobs", len(CANDIDATES), len(JOBS))
    return True
