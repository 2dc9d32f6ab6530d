"""LLM service serving resume analysis and generation in-process.

Supports multiple backends: OpenAI, Ollama, Groq.
Uses langchain-core for unified interface.
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, List

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.output_parsers import JsonOutputParser
from pydantic import ValidationError as PydanticValidationError

from ..errors import ParseError, RequestError
from ..models import JobAnalysisResult, LLMConfig, StructuredResume

logger = logging.getLogger(__name__)


ANALYSIS_SYSTEM_PROMPT = """You are an expert technical recruiter and resume consultant.
Extract every skill, tool and technology the job description asks for.
For each one decide whether it is required, how important it is
(high, medium or low) and which category it belongs to.
Estimate the experience level the role targets, list the key requirements,
and compare the requirements with the candidate's current skills.

Respond in JSON format matching this schema:
{format_instructions}"""

GENERATION_SYSTEM_PROMPT = """You are an expert resume writer producing ATS-optimized resumes.
Rewrite the candidate's resume for the job description below.
Emphasize the selected skills wherever the candidate's history supports them,
write a professional summary for the given experience level, and organize
skills into named groups.

Respond with a single JSON object with the optional keys
"summary" (string), "skillSections" ([{"name", "skills"}]),
"workExperiences" ([{"position", "company", "startDate", "endDate", "description"}])
and "projects" ([{"title", "description", "startDate", "endDate"}]).
Omit a key to leave that section unchanged."""

RESUME_SYSTEM_PROMPT = """You are an expert resume parser.
Extract structured data from the resume text. Keep dates as written.
Put each bullet point of an entry in its own description line.
If a field is missing, use an empty string.

Respond in JSON format matching this schema:
{format_instructions}"""


class LLMService:
    """LLM service implementation using langchain-core.

    Streams the same JSON bodies the web service's AI routes produce, so it
    can stand in for HttpAIClient.

    Supports:
    - OpenAI (gpt-4o-mini, gpt-4o)
    - Ollama (local models)
    - Groq (fast inference)

    Usage:
        service = LLMService(config)
        async for chunk in service.stream_analysis(payload):
            ...
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._llm: BaseChatModel | None = None

    async def __aenter__(self) -> "LLMService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    def _get_llm(self) -> BaseChatModel:
        """Lazy-load the LLM based on configuration."""
        if self._llm is not None:
            return self._llm

        if self.config.provider == "openai":
            from langchain_openai import ChatOpenAI
            self._llm = ChatOpenAI(
                model=self.config.model,
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                temperature=self.config.temperature,
            )
        elif self.config.provider == "ollama":
            from langchain_ollama import ChatOllama
            self._llm = ChatOllama(
                model=self.config.model,
                base_url=self.config.base_url or "http://localhost:11434",
                temperature=self.config.temperature,
            )
        elif self.config.provider == "groq":
            from langchain_groq import ChatGroq
            self._llm = ChatGroq(
                model=self.config.model,
                api_key=self.config.api_key,
                temperature=self.config.temperature,
            )
        else:
            raise ValueError(f"Unknown LLM provider: {self.config.provider}")

        return self._llm

    def analysis_messages(self, payload: Dict[str, Any]) -> List[BaseMessage]:
        parser = JsonOutputParser(pydantic_object=JobAnalysisResult)
        current_skills = payload.get("currentSkills") or []

        user_prompt = f"""Candidate's Current Skills: {', '.join(current_skills) or 'none listed'}

Job Description:
{payload.get('jobDescription', '')}"""

        return [
            SystemMessage(content=ANALYSIS_SYSTEM_PROMPT.format(
                format_instructions=parser.get_format_instructions()
            )),
            HumanMessage(content=user_prompt),
        ]

    def generation_messages(self, payload: Dict[str, Any]) -> List[BaseMessage]:
        user_prompt = f"""Experience Level: {payload.get('experienceLevel', 'mid')}
Skills To Emphasize: {', '.join(payload.get('selectedSkills') or [])}

Current Resume (JSON):
{json.dumps(payload.get('currentResume') or {}, indent=2)}

Job Description:
{payload.get('jobDescription', '')}"""

        return [
            SystemMessage(content=GENERATION_SYSTEM_PROMPT),
            HumanMessage(content=user_prompt),
        ]

    def stream_analysis(self, payload: Dict[str, Any]) -> AsyncIterator[str]:
        return self._stream(self.analysis_messages(payload))

    def stream_generation(self, payload: Dict[str, Any]) -> AsyncIterator[str]:
        return self._stream(self.generation_messages(payload))

    async def _stream(self, messages: List[BaseMessage]) -> AsyncIterator[str]:
        """Yield text chunks of the model's reply.

        Raises:
            RequestError: If the provider cannot be loaded or the call fails.
        """
        try:
            llm = self._get_llm()
            async for chunk in llm.astream(messages):
                if isinstance(chunk.content, str):
                    yield chunk.content
        except Exception as e:
            raise RequestError(f"LLM request failed: {e}") from e

    async def structure_resume(self, resume_text: str) -> StructuredResume:
        """Structure raw resume text into profile, entries and skills.

        Raises:
            ParseError: If the reply is not a resume-shaped JSON object.
        """
        llm = self._get_llm()
        parser = JsonOutputParser(pydantic_object=StructuredResume)

        messages = [
            SystemMessage(content=RESUME_SYSTEM_PROMPT.format(
                format_instructions=parser.get_format_instructions()
            )),
            HumanMessage(content=f"Resume text:\n\n{resume_text}"),
        ]

        response = await llm.ainvoke(messages)
        try:
            result = parser.parse(response.content)
            structured = StructuredResume.model_validate(result)
        except (OutputParserException, PydanticValidationError) as e:
            raise ParseError(f"Could not structure resume text: {e}") from e

        logger.info(
            f"Structured resume: {len(structured.work_experiences)} work entries, "
            f"{len(structured.projects)} projects"
        )
        return structured

