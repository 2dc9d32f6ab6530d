"""Shared fixtures for the resume builder tests.

FakeAIClient stands in for the streamed AI endpoints: each call records
its payload and replays a list of chunks, optionally failing afterwards.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence, Union

import pytest

from resume_builder.models import (
    ProjectEntry,
    ResumeDocument,
    SkillGroup,
    StructuredResume,
    WorkExperience,
)

Chunk = Union[bytes, str]


class FakeAIClient:
    """In-memory AIClient replaying canned streamed bodies."""

    def __init__(
        self,
        analysis_chunks: Sequence[Chunk] = (),
        generation_chunks: Sequence[Chunk] = (),
        analysis_error: Optional[Exception] = None,
        generation_error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.analysis_chunks = list(analysis_chunks)
        self.generation_chunks = list(generation_chunks)
        self.analysis_error = analysis_error
        self.generation_error = generation_error
        self.gate = gate
        self.analysis_payloads: List[Dict[str, Any]] = []
        self.generation_payloads: List[Dict[str, Any]] = []

    def stream_analysis(self, payload):
        self.analysis_payloads.append(payload)
        return self._replay(self.analysis_chunks, self.analysis_error)

    def stream_generation(self, payload):
        self.generation_payloads.append(payload)
        return self._replay(self.generation_chunks, self.generation_error)

    async def _replay(self, chunks, error):
        if self.gate is not None:
            await self.gate.wait()
        for chunk in chunks:
            yield chunk
        if error is not None:
            raise error


class FakeResumeParser:
    """ResumeParser that records whether the staged file existed."""

    def __init__(self, result: Optional[StructuredResume] = None, error: Optional[Exception] = None):
        self.result = result or StructuredResume()
        self.error = error
        self.urls: List[str] = []
        self.existed: List[bool] = []

    async def parse(self, file_url: str) -> StructuredResume:
        from resume_builder.services import file_url_to_path

        self.urls.append(file_url)
        self.existed.append(file_url_to_path(file_url).exists())
        if self.error is not None:
            raise self.error
        return self.result


def chunked(text: str, size: int = 7) -> List[bytes]:
    """Split text into small byte chunks like a streamed body."""
    data = text.encode("utf-8")
    return [data[i:i + size] for i in range(0, len(data), size)]


@pytest.fixture
def analysis_data() -> Dict[str, Any]:
    return {
        "extractedSkills": [
            {"skill": "Go", "required": True, "importance": "high", "category": "Languages"},
            {"skill": "SQL", "required": True, "importance": "medium", "category": "Databases"},
            {"skill": "Docker", "required": False, "importance": "low", "category": "Tools"},
        ],
        "experienceLevel": "senior",
        "keyRequirements": ["5+ years backend experience"],
        "matchAnalysis": {
            "totalSkills": 3,
            "matchingSkills": 1,
            "missingCritical": ["Go"],
            "strengths": ["SQL"],
        },
    }


@pytest.fixture
def analysis_body(analysis_data) -> str:
    return f"Here is the analysis:\n{json.dumps(analysis_data)}\nDone."


@pytest.fixture
def base_document() -> ResumeDocument:
    return ResumeDocument(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        summary="Backend engineer.",
        skill_sections=[
            SkillGroup(name="Languages", skills=["Python", "SQL"]),
            SkillGroup(name="Frameworks", skills=["FastAPI"]),
        ],
        work_experiences=[
            WorkExperience(
                position="Engineer",
                company="Analytical Engines",
                start_date="Jan 2020",
                end_date="Present",
                description="Built the difference engine API",
            ),
        ],
        projects=[ProjectEntry(title="Notes", description="Annotated translations")],
        selected_template="modern",
    )


@pytest.fixture
def make_client():
    return FakeAIClient


@pytest.fixture
def make_parser():
    return FakeResumeParser


@pytest.fixture
def chunk_text():
    return chunked
