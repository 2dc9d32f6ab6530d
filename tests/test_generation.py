"""Tests for generated-content merging and the generation invoker.

The merge policy is asymmetric on purpose: a missing summary keeps the
base summary, a missing skillSections empties the groups, and the entry
lists only change when the generated list is non-empty.
"""

import json

import pytest

from resume_builder.core.generation import generate_content, merge_generated
from resume_builder.errors import ParseError, RequestError
from resume_builder.models import (
    GeneratedContent,
    ProjectEntry,
    ResumeDocument,
    SkillGroup,
    WorkExperience,
)


class TestMergeGenerated:
    def test_all_fields_absent_only_clears_skill_sections(self, base_document):
        merged = merge_generated(base_document, GeneratedContent())

        assert base_document.skill_sections  # non-empty before the merge
        assert merged.skill_sections == []
        assert merged == base_document.model_copy(update={"skill_sections": []})

    def test_generated_summary_replaces_base(self, base_document):
        merged = merge_generated(base_document, GeneratedContent(summary="Tailored summary"))
        assert merged.summary == "Tailored summary"

    def test_empty_summary_keeps_base(self, base_document):
        merged = merge_generated(base_document, GeneratedContent(summary=""))
        assert merged.summary == "Backend engineer."

    def test_generated_skill_sections_replace_base(self, base_document):
        groups = [SkillGroup(name="Cloud", skills=["AWS"])]
        merged = merge_generated(base_document, GeneratedContent(skill_sections=groups))
        assert merged.skill_sections == groups

    def test_empty_generated_skill_sections_are_kept_empty(self, base_document):
        merged = merge_generated(base_document, GeneratedContent(skill_sections=[]))
        assert merged.skill_sections == []

    def test_empty_work_experiences_fall_back_to_base(self, base_document):
        merged = merge_generated(base_document, GeneratedContent(work_experiences=[]))
        assert merged.work_experiences == base_document.work_experiences

    def test_non_empty_work_experiences_replace_base(self, base_document):
        jobs = [WorkExperience(position="Staff Engineer", company="Engines Ltd")]
        merged = merge_generated(base_document, GeneratedContent(work_experiences=jobs))
        assert merged.work_experiences == jobs

    def test_missing_lists_in_base_default_to_empty(self):
        merged = merge_generated(ResumeDocument(), GeneratedContent(work_experiences=[], projects=[]))
        assert merged.work_experiences == []
        assert merged.projects == []

    def test_projects_follow_length_gated_rule(self, base_document):
        merged = merge_generated(base_document, GeneratedContent(projects=[]))
        assert merged.projects == base_document.projects

        projects = [ProjectEntry(title="Compiler")]
        merged = merge_generated(base_document, GeneratedContent(projects=projects))
        assert merged.projects == projects

    def test_other_fields_carried_over(self, base_document):
        base = base_document.model_copy(update={"email": "ada@engines.io"})
        merged = merge_generated(base, GeneratedContent(summary="New"))
        assert merged.email == "ada@engines.io"
        assert merged.selected_template == "modern"

    def test_base_is_not_mutated(self, base_document):
        before = base_document.model_copy(deep=True)
        merge_generated(base_document, GeneratedContent(summary="New", skill_sections=[]))
        assert base_document == before


class TestGeneratedContentFromResponse:
    def test_camel_case_fields(self):
        content = GeneratedContent.from_response({
            "summary": "S",
            "skillSections": [{"name": "Languages", "skills": ["Go"]}],
            "workExperiences": [{"position": "Dev", "startDate": "2021"}],
        })
        assert content.summary == "S"
        assert content.skill_sections[0].skills == ["Go"]
        assert content.work_experiences[0].start_date == "2021"
        assert content.projects is None

    def test_null_fields_are_absent(self):
        content = GeneratedContent.from_response({"summary": None, "projects": None})
        assert content.summary is None
        assert content.projects is None

    def test_wrongly_typed_field_is_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            GeneratedContent.from_response({"summary": 42, "projects": "none"})
        assert "summary" in str(exc_info.value)
        assert "projects" in str(exc_info.value)


class TestGenerateContent:
    @pytest.mark.asyncio
    async def test_sends_payload_and_parses_stream(self, make_client, chunk_text, base_document):
        body = 'Sure! {"summary": "Tailored", "projects": []} Hope this helps.'
        client = make_client(generation_chunks=chunk_text(body))

        content = await generate_content(client, "Go developer", ["Go"], base_document, "senior")

        assert content.summary == "Tailored"
        assert content.projects == []
        payload = client.generation_payloads[0]
        assert payload["jobDescription"] == "Go developer"
        assert payload["selectedSkills"] == ["Go"]
        assert payload["experienceLevel"] == "senior"
        assert payload["currentResume"]["firstName"] == "Ada"
        assert payload["currentResume"]["skillSections"][0]["name"] == "Languages"

    @pytest.mark.asyncio
    async def test_blank_experience_level_defaults_to_mid(self, make_client, base_document):
        client = make_client(generation_chunks=['{"summary": "x"}'])
        await generate_content(client, "jd", ["Go"], base_document, "")
        assert client.generation_payloads[0]["experienceLevel"] == "mid"

    @pytest.mark.asyncio
    async def test_no_json_is_parse_error(self, make_client, base_document):
        client = make_client(generation_chunks=["I could not do that."])
        with pytest.raises(ParseError):
            await generate_content(client, "jd", ["Go"], base_document)

    @pytest.mark.asyncio
    async def test_request_error_propagates(self, make_client, base_document):
        client = make_client(generation_error=RequestError("boom", status_code=502))
        with pytest.raises(RequestError):
            await generate_content(client, "jd", ["Go"], base_document)

    @pytest.mark.asyncio
    async def test_payload_is_json_serializable(self, make_client, base_document):
        client = make_client(generation_chunks=["{}"])
        await generate_content(client, "jd", {"Go"}, base_document)
        json.dumps(client.generation_payloads[0])
