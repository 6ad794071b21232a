import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read once at import time, so the test environment must be
# in place before any app module is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="resume-ats-tests-")
os.environ["RESUME_STORE_DB_PATH"] = os.path.join(_TMP_DIR, "resumes.db")
os.environ["SUBSCRIPTION_DB_PATH"] = os.path.join(_TMP_DIR, "subscriptions.db")
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["FREE_JOB_TARGET_QUOTA"] = "3"
os.environ["API_KEY"] = ""
os.environ["TOOLS_LLM_ENABLED"] = "0"

from app.schemas.resume import (  # noqa: E402
    Course,
    EduItem,
    PersonalInfo,
    ResumeDocument,
    Skill,
    WorkItem,
)

SUMMARY_SENTENCE = (
    "Marketing manager with eight years of experience growing revenue for consumer brands "
    "through data driven campaigns and clear team leadership."
)
# Five copies of a 20-token sentence.
HUNDRED_WORD_SUMMARY = " ".join([SUMMARY_SENTENCE] * 5)


def full_personal_info() -> PersonalInfo:
    return PersonalInfo(
        name="Jane Doe",
        job_title="Marketing Manager",
        location="Austin, TX",
        email="jane@example.com",
        phone="+1 555 111 2222",
    )


def good_resume() -> ResumeDocument:
    return ResumeDocument(
        personal_info=full_personal_info(),
        summary=HUNDRED_WORD_SUMMARY,
        work_experience=[
            WorkItem(
                job_title="Marketing Manager",
                company="Acme Corp",
                start_date="2019-01",
                end_date="Present",
                location="Austin, TX",
                responsibilities=["Increased sales by 30% through targeted campaigns"],
            )
        ],
        education=[EduItem(degree="B.A. Marketing", institution="University of Texas", graduation_year="2015")],
        skills=[Skill(name="Campaign Strategy", level=90), Skill(name="Google Analytics", level=80)],
        courses_and_certifications=[
            Course(title="Google Ads Certification", provider="Google", type="certification")
        ],
    )


def data_analyst_resume() -> ResumeDocument:
    return ResumeDocument(
        personal_info=full_personal_info(),
        summary="Data analyst who builds reporting pipelines and dashboards for finance teams.",
        work_experience=[
            WorkItem(
                job_title="Data Analyst",
                company="Globex",
                responsibilities=[
                    "Built weekly revenue dashboards used by 40 account managers",
                    "Automated reconciliation reports for the finance team",
                ],
            )
        ],
        education=[EduItem(degree="B.S. Statistics", institution="State University")],
        skills=[Skill(name="Python", level=85), Skill(name="SQL", level=80)],
    )
