"""Core domain models for candidates and the fixed filter vocabulary.

This module defines:
- ExperienceLevel, WorkType, JobType, EducationLevel: the enumerated filter values
- EducationEntry: one education line of a resume
- CandidateRecord: read-only view of a candidate as supplied by the candidate repository
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from talentmatch.utils.coercion import to_number, to_string_list, to_text
from talentmatch.utils.timestamps import coerce_datetime


class ExperienceLevel(str, Enum):
    """Experience bands an employer can ask for."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXEC = "exec"


class WorkType(str, Enum):
    """Where the work happens."""

    REMOTE = "remote"
    HYBRID = "hybrid"
    OFFICE = "office"


class JobType(str, Enum):
    """Employment arrangement."""

    FULLTIME = "fulltime"
    PARTTIME = "parttime"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class EducationLevel(str, Enum):
    """Highest education level an employer can ask for."""

    HIGHSCHOOL = "highschool"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"


class EducationEntry(BaseModel):
    """A single education line extracted from a resume."""

    degree: str = Field("", description="Degree as written on the resume")
    institution: str = Field("", description="School or university")

    @field_validator("degree", "institution", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return to_text(v)

    model_config = {"frozen": True}


class CandidateRecord(BaseModel):
    """Candidate as seen by the scoring engine.

    Records are built by the upstream resume-extraction system and are
    immutable for the duration of a scoring pass. Field validators are
    deliberately lenient: missing lists become [], missing numbers 0 and
    missing strings "", so a half-filled profile is scored rather than
    rejected. Only the identifier is required.

    Both snake_case and camelCase keys are accepted
    (``total_experience_years`` / ``totalExperienceYears``).
    """

    candidate_id: str = Field(..., description="Identifier assigned by the candidate repository")
    full_name: str = Field("", description="Display name")
    skills: List[str] = Field(default_factory=list, description="Skill names as listed on the resume")
    location_text: str = Field("", description="Current location, free text")
    total_experience_years: float = Field(0.0, description="Total professional experience in years")
    selected_work_types: List[str] = Field(
        default_factory=list, description="Work types the candidate accepts (remote, hybrid, office)"
    )
    job_main_type: str = Field("", description="Preferred job type (fulltime, parttime, ...)")
    preferred_locations: List[str] = Field(
        default_factory=list, description="Locations the candidate is willing to work in"
    )
    education_entries: List[EducationEntry] = Field(default_factory=list)
    availability: Optional[str] = Field(None, description="Availability token, e.g. 'immediate'")
    min_annual_ctc: float = Field(0.0, description="Minimum expected annual compensation")
    is_active: bool = Field(True, description="Whether the listing is switched on")
    activation_expires_at: Optional[datetime] = Field(
        None, description="When the listing stops being visible to employers (UTC)"
    )
    created_at: Optional[datetime] = Field(None, description="When the resume was uploaded (UTC)")
    extra: Dict[str, Any] = Field(
        default_factory=dict, description="Upstream fields passed through for presentation"
    )

    @field_validator("candidate_id", mode="before")
    @classmethod
    def require_identifier(cls, v: Any) -> str:
        """Accept string or numeric identifiers; reject blanks."""
        text = to_text(v)
        if not text:
            raise ValueError("candidate_id cannot be empty")
        return text

    @field_validator("full_name", "location_text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return to_text(v)

    @field_validator("skills", "preferred_locations", mode="before")
    @classmethod
    def coerce_string_list(cls, v: Any) -> List[str]:
        return to_string_list(v)

    @field_validator("selected_work_types", mode="before")
    @classmethod
    def coerce_work_types(cls, v: Any) -> List[str]:
        """Lower-case work type tokens so "Remote" and "remote" compare equal."""
        return [item.lower() for item in to_string_list(v)]

    @field_validator("job_main_type", mode="before")
    @classmethod
    def coerce_job_type(cls, v: Any) -> str:
        return to_text(v).lower()

    @field_validator("total_experience_years", "min_annual_ctc", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        return to_number(v)

    @field_validator("education_entries", mode="before")
    @classmethod
    def coerce_education(cls, v: Any) -> List[Any]:
        """Accept education entries as dicts, bare degree strings or models."""
        if v is None:
            return []
        if isinstance(v, (dict, str, EducationEntry)):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []

        entries: List[Any] = []
        for item in v:
            if isinstance(item, EducationEntry):
                entries.append(item)
            elif isinstance(item, Mapping):
                entries.append({
                    "degree": item.get("degree"),
                    "institution": item.get("institution"),
                })
            elif isinstance(item, str) and item.strip():
                entries.append({"degree": item})
        return entries

    @field_validator("availability", mode="before")
    @classmethod
    def coerce_availability(cls, v: Any) -> Optional[str]:
        text = to_text(v)
        return text or None

    @field_validator("is_active", mode="before")
    @classmethod
    def coerce_active(cls, v: Any) -> bool:
        if v is None:
            return True
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes", "y")
        return bool(v)

    @field_validator("activation_expires_at", "created_at", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Optional[datetime]:
        return coerce_datetime(v)

    @field_validator("extra", mode="before")
    @classmethod
    def coerce_extra(cls, v: Any) -> Dict[str, Any]:
        return dict(v) if isinstance(v, Mapping) else {}

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "json_schema_extra": {"example": {
            "candidateId": "64f1c2a9e4b0a1d2c3b4a5f6",
            "fullName": "Asha Rao",
            "skills": ["React", "Node.js", "TypeScript"],
            "locationText": "Bengaluru, India",
            "totalExperienceYears": 3.5,
            "selectedWorkTypes": ["remote", "hybrid"],
            "jobMainType": "fulltime",
            "preferredLocations": ["Pune", "Remote"],
            "educationEntries": [{"degree": "B.Tech Computer Science"}],
            "availability": "1 month",
            "minAnnualCtc": 60000,
        }},
    }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "CandidateRecord":
        """Build a record from a stored resume document.

        Understands the nested shape produced by the resume-extraction
        service (``metadata.selectedJobTypes``,
        ``metadata.minCtcRequirements.annualCtc.amount``, ``jobPreferences``,
        ...) as well as flat camelCase documents. The first non-empty value
        along each lookup path wins. Unconsumed top-level keys are kept in
        ``extra``. A missing identifier is replaced by a random one.

        Args:
            doc: Resume document as returned by the candidate store

        Returns:
            CandidateRecord
        """
        candidate_id = _first(doc, "candidateId", "candidate_id", "_id", "id")
        if not to_text(candidate_id):
            candidate_id = uuid4().hex

        record = {
            "candidate_id": candidate_id,
            "full_name": _first(doc, "fullName", "full_name", "name", "userId.fullName"),
            "skills": _skills_from(doc),
            "location_text": _first(doc, "locationText", "location_text", "location", "metadata.location"),
            "total_experience_years": _first(
                doc,
                "totalExperienceYears",
                "total_experience_years",
                "metadata.totalExperienceYears",
                "experienceYears",
            ),
            "selected_work_types": _first(
                doc,
                "selectedWorkTypes",
                "selected_work_types",
                "metadata.selectedJobTypes",
                "jobPreferences.workMode",
            ),
            "job_main_type": _first(
                doc, "jobMainType", "job_main_type", "metadata.jobMainType", "jobPreferences.jobType"
            ),
            "preferred_locations": _first(
                doc,
                "preferredLocations",
                "preferred_locations",
                "metadata.selectedPreferredLocation",
                "jobPreferences.locations",
            ),
            "education_entries": _first(
                doc, "educationEntries", "education_entries", "education", "parsedData.education"
            ),
            "availability": _first(
                doc, "availability", "metadata.availability", "jobPreferences.availability"
            ),
            "min_annual_ctc": _first(
                doc,
                "minAnnualCtc",
                "min_annual_ctc",
                "metadata.minCtcRequirements.annualCtc.amount",
                "jobPreferences.minCTC",
            ),
            "is_active": _first(doc, "isActive", "is_active"),
            "activation_expires_at": _first(doc, "activationExpiresAt", "activation_expires_at"),
            "created_at": _first(doc, "createdAt", "created_at"),
            "extra": {k: v for k, v in doc.items() if k not in _CONSUMED_KEYS},
        }
        return cls.model_validate(record)


_CONSUMED_KEYS = frozenset({
    "candidateId", "candidate_id", "_id", "id",
    "fullName", "full_name", "name",
    "skills", "locationText", "location_text", "location",
    "totalExperienceYears", "total_experience_years", "experienceYears",
    "selectedWorkTypes", "selected_work_types", "jobMainType", "job_main_type",
    "preferredLocations", "preferred_locations",
    "educationEntries", "education_entries", "education",
    "availability", "minAnnualCtc", "min_annual_ctc",
    "isActive", "is_active", "activationExpiresAt", "activation_expires_at",
    "createdAt", "created_at",
})


def _lookup(doc: Mapping[str, Any], path: str) -> Any:
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def _first(doc: Mapping[str, Any], *paths: str) -> Any:
    for path in paths:
        value = _lookup(doc, path)
        if value is None or value == "" or value == [] or value == {}:
            continue
        return value
    return None


def _skills_from(doc: Mapping[str, Any]) -> List[str]:
    """Extract skills from a flat list or the categorized extraction output."""
    raw = _first(doc, "skills", "parsedData.skills")
    if isinstance(raw, Mapping):
        if raw.get("all"):
            return to_string_list(raw["all"])
        flattened: List[str] = []
        for values in raw.values():
            flattened.extend(to_string_list(values))
        return flattened
    return to_string_list(raw)
