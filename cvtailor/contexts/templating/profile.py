"""
User Profile Data Structures

Read-only snapshot of the user profile supplied with each render call.
The web layer sends camelCase JSON; from_dict accepts that or snake_case.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


def _pick(data: Mapping[str, Any], *keys: str) -> str:
    """Return the first present, non-None value among keys as a string."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    return ""


@dataclass(frozen=True)
class WorkExperience:
    """
    Single work history entry.

    Attributes:
        job_title: Position held
        company: Employer name
        start_date: Start date as entered (usually YYYY-MM)
        end_date: End date, empty for a current position
        responsibilities: Free-text description of the role
    """

    job_title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: str = ""

    @property
    def is_current(self) -> bool:
        return not self.end_date.strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkExperience":
        return cls(
            job_title=_pick(data, "jobTitle", "job_title", "title"),
            company=_pick(data, "company"),
            start_date=_pick(data, "startDate", "start_date"),
            end_date=_pick(data, "endDate", "end_date"),
            responsibilities=_pick(data, "responsibilities", "description"),
        )


@dataclass(frozen=True)
class UserProfile:
    """
    User profile snapshot used to fill literal placeholders and fallbacks.

    Attributes:
        full_name, email, phone, location, current_title: Literal placeholder values
        experience_level: Seniority bucket (e.g., "3-5")
        skills: Comma-separated skills
        summary: User-written professional summary
        education: Free-text education
        languages: Free-text spoken languages
        work_experiences: Work history in display order
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    current_title: str = ""
    experience_level: str = ""
    skills: str = ""
    summary: str = ""
    education: str = ""
    languages: str = ""
    work_experiences: List[WorkExperience] = field(default_factory=list)

    @property
    def primary_skill(self) -> str:
        """First comma-separated skill, or empty string."""
        return self.skills.split(",")[0].strip() if self.skills else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        """
        Build a profile from a web payload or YAML/JSON file contents.

        Args:
            data: Profile mapping (camelCase or snake_case keys)

        Returns:
            UserProfile instance
        """
        raw_experiences = data.get("workExperiences")
        if raw_experiences is None:
            raw_experiences = data.get("work_experiences")
        if raw_experiences is None:
            raw_experiences = data.get("experiences") or []

        return cls(
            full_name=_pick(data, "fullName", "full_name"),
            email=_pick(data, "email"),
            phone=_pick(data, "phone"),
            location=_pick(data, "location"),
            current_title=_pick(data, "currentTitle", "current_title"),
            experience_level=_pick(data, "experienceLevel", "experience_level", "experience"),
            skills=_pick(data, "skills"),
            summary=_pick(data, "summary"),
            education=_pick(data, "education"),
            languages=_pick(data, "languages"),
            work_experiences=[WorkExperience.from_dict(entry) for entry in raw_experiences],
        )

    def field_values(self, mapping: Dict[str, str]) -> Dict[str, str]:
        """Resolve placeholder key -> attribute mapping to placeholder key -> value."""
        return {key: getattr(self, attribute) or "" for key, attribute in mapping.items()}
