"""Unit tests for domain models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from talentmatch.domain.models import CandidateRecord, EducationEntry


class TestCandidateRecord:
    """Tests for CandidateRecord validation."""

    def test_minimal_record_defaults(self):
        """Test that only the identifier is required."""
        record = CandidateRecord(candidate_id="c-1")

        assert record.skills == []
        assert record.total_experience_years == 0.0
        assert record.selected_work_types == []
        assert record.job_main_type == ""
        assert record.education_entries == []
        assert record.availability is None
        assert record.min_annual_ctc == 0.0
        assert record.is_active is True
        assert record.activation_expires_at is None
        assert record.extra == {}

    @pytest.mark.parametrize("candidate_id", ["", "   ", None])
    def test_identifier_required(self, candidate_id):
        """Test that a blank identifier is rejected."""
        with pytest.raises(ValidationError):
            CandidateRecord(candidate_id=candidate_id)

    def test_numeric_identifier(self):
        """Test that numeric identifiers are stored as strings."""
        assert CandidateRecord(candidate_id=1017).candidate_id == "1017"

    def test_camel_case_keys(self):
        """Test that camelCase keys populate the same fields."""
        record = CandidateRecord.model_validate({
            "candidateId": "c-2",
            "totalExperienceYears": "4.5",
            "selectedWorkTypes": ["Remote", "HYBRID"],
            "jobMainType": "FullTime",
            "minAnnualCtc": "75,000",
        })

        assert record.total_experience_years == 4.5
        assert record.selected_work_types == ["remote", "hybrid"]
        assert record.job_main_type == "fulltime"
        assert record.min_annual_ctc == 75000

    def test_lenient_values(self):
        """Test that malformed optional values degrade to defaults."""
        record = CandidateRecord(
            candidate_id="c-3",
            skills="React",
            total_experience_years="lots",
            preferred_locations=None,
            availability="  ",
        )

        assert record.skills == ["React"]
        assert record.total_experience_years == 0.0
        assert record.preferred_locations == []
        assert record.availability is None

    def test_education_shapes(self):
        """Test that education accepts dicts, strings and models."""
        record = CandidateRecord(
            candidate_id="c-4",
            education_entries=[
                {"degree": "B.Tech", "institution": "IIT"},
                "MBA",
                EducationEntry(degree="PhD Physics"),
                42,
            ],
        )

        assert [entry.degree for entry in record.education_entries] == ["B.Tech", "MBA", "PhD Physics"]
        assert record.education_entries[0].institution == "IIT"

    def test_single_education_dict(self):
        """Test that a lone education mapping is wrapped in a list."""
        record = CandidateRecord(candidate_id="c-5", education_entries={"degree": "MSc"})

        assert [entry.degree for entry in record.education_entries] == ["MSc"]

    @pytest.mark.parametrize(
        "value,expected",
        [(None, True), (True, True), (False, False), ("true", True), ("no", False), (0, False), ("Yes", True)],
    )
    def test_is_active_coercion(self, value, expected):
        """Test active flag coercion."""
        assert CandidateRecord(candidate_id="c", is_active=value).is_active is expected

    def test_timestamps_coerced_to_utc(self):
        """Test that expiry and creation times are normalized to aware UTC."""
        record = CandidateRecord(
            candidate_id="c-6",
            activation_expires_at="2026-06-01T00:00:00Z",
            created_at=datetime(2026, 1, 1, 9, 0),
        )

        assert record.activation_expires_at == datetime(2026, 6, 1, tzinfo=timezone.utc)
        assert record.created_at.tzinfo == timezone.utc

    def test_record_is_frozen(self):
        """Test that records cannot be modified during scoring."""
        record = CandidateRecord(candidate_id="c-7")

        with pytest.raises(ValidationError):
            record.skills = ["Go"]


class TestCandidateRecordFromDocument:
    """Tests for building records from stored resume documents."""

    def test_nested_document(self):
        """Test the nested shape produced by resume extraction."""
        doc = {
            "_id": "64f1c2a9",
            "userId": {"fullName": "Asha Rao"},
            "location": "Bengaluru",
            "skills": {"all": ["React", "Node.js"], "frontend": ["React"]},
            "education": [{"degree": "B.E. Computer Science", "institution": "RVCE"}],
            "isActive": True,
            "activationExpiresAt": "2026-12-31T00:00:00Z",
            "createdAt": "2026-01-10T08:00:00Z",
            "resumeUrl": "https://cdn.example.com/r/64f1c2a9.pdf",
            "metadata": {
                "totalExperienceYears": 3.5,
                "selectedJobTypes": ["remote", "hybrid"],
                "jobMainType": "fulltime",
                "selectedPreferredLocation": ["Pune"],
                "availability": "immediate",
                "minCtcRequirements": {"annualCtc": {"amount": 1200000}},
            },
        }

        record = CandidateRecord.from_document(doc)

        assert record.candidate_id == "64f1c2a9"
        assert record.full_name == "Asha Rao"
        assert record.location_text == "Bengaluru"
        assert record.skills == ["React", "Node.js"]
        assert record.total_experience_years == 3.5
        assert record.selected_work_types == ["remote", "hybrid"]
        assert record.job_main_type == "fulltime"
        assert record.preferred_locations == ["Pune"]
        assert record.education_entries[0].degree == "B.E. Computer Science"
        assert record.availability == "immediate"
        assert record.min_annual_ctc == 1200000
        assert record.activation_expires_at == datetime(2026, 12, 31, tzinfo=timezone.utc)
        assert record.extra == {
            "userId": {"fullName": "Asha Rao"},
            "resumeUrl": "https://cdn.example.com/r/64f1c2a9.pdf",
            "metadata": doc["metadata"],
        }

    def test_flat_document(self):
        """Test flat camelCase documents."""
        record = CandidateRecord.from_document({
            "candidateId": "c-9",
            "fullName": "Ben",
            "skills": ["Java"],
            "totalExperienceYears": 8,
            "selectedWorkTypes": ["office"],
            "jobMainType": "contract",
        })

        assert record.candidate_id == "c-9"
        assert record.total_experience_years == 8
        assert record.job_main_type == "contract"
        assert record.extra == {}

    def test_job_preferences_shape(self):
        """Test the jobPreferences block used by older profiles."""
        record = CandidateRecord.from_document({
            "id": 12,
            "jobPreferences": {
                "workMode": ["Remote"],
                "jobType": "parttime",
                "locations": ["Lisbon"],
                "minCTC": "40000",
            },
        })

        assert record.candidate_id == "12"
        assert record.selected_work_types == ["remote"]
        assert record.job_main_type == "parttime"
        assert record.preferred_locations == ["Lisbon"]
        assert record.min_annual_ctc == 40000

    def test_first_non_empty_value_wins(self):
        """Test that empty top-level values fall through to nested ones."""
        record = CandidateRecord.from_document({
            "_id": "c-10",
            "totalExperienceYears": None,
            "availability": "",
            "metadata": {"totalExperienceYears": 2, "availability": "2 weeks"},
        })

        assert record.total_experience_years == 2
        assert record.availability == "2 weeks"

    def test_categorized_skills_without_all(self):
        """Test that skill categories are flattened when 'all' is missing."""
        record = CandidateRecord.from_document({
            "_id": "c-11",
            "skills": {"frontend": ["React"], "backend": ["Go", "SQL"]},
        })

        assert record.skills == ["React", "Go", "SQL"]

    def test_missing_identifier_generated(self):
        """Test that a random identifier is assigned when none is present."""
        first = CandidateRecord.from_document({"fullName": "Anon"})
        second = CandidateRecord.from_document({"fullName": "Anon"})

        assert first.candidate_id
        assert first.candidate_id != second.candidate_id
