"""Generation stage - tailored resume content and merge into the document."""

import logging
from typing import Iterable

from ..errors import ParseError
from ..models import GeneratedContent, ResumeDocument
from ..services import AIClient, drain_stream, extract_json_object

logger = logging.getLogger(__name__)

DEFAULT_EXPERIENCE_LEVEL = "mid"


async def generate_content(
    client: AIClient,
    job_description: str,
    selected_skills: Iterable[str],
    base_resume: ResumeDocument,
    experience_level: str = DEFAULT_EXPERIENCE_LEVEL,
) -> GeneratedContent:
    """GENERATION stage: Ask the generation service for enhanced content.

    Args:
        client: Source of the streamed generation response
        job_description: Raw job description text
        selected_skills: Skill names to emphasize
        base_resume: Uploaded resume if any, else the live document
        experience_level: Level hint from the analysis ("mid" when blank)

    Returns:
        Generated content with whichever sections the service produced

    Raises:
        RequestError: If the service call fails
        ParseError: If the response does not contain usable content
    """
    payload = {
        "jobDescription": job_description,
        "selectedSkills": list(selected_skills),
        "currentResume": base_resume.to_payload(),
        "experienceLevel": experience_level or DEFAULT_EXPERIENCE_LEVEL,
    }

    logger.info(
        f"Generating resume content for {len(payload['selectedSkills'])} skills "
        f"at level '{payload['experienceLevel']}'"
    )
    text = await drain_stream(client.stream_generation(payload))

    try:
        content = GeneratedContent.from_response(extract_json_object(text))
    except ParseError:
        logger.warning(f"Failed to parse generated resume: {text[:200]!r}")
        raise

    produced = [name for name, value in content if value is not None]
    logger.info(f"Generated sections: {produced or 'none'}")
    return content


def merge_generated(base: ResumeDocument, generated: GeneratedContent) -> ResumeDocument:
    """Merge generated content into the base resume.

    - summary: generated value if non-empty, else the base summary
    - skill_sections: generated value if present, else an empty list
      (the base groups are dropped)
    - work_experiences / projects: generated value if non-empty, else the
      base entries, else an empty list
    All other base fields are carried over untouched.
    """
    return base.model_copy(
        deep=True,
        update={
            "summary": generated.summary or base.summary,
            "skill_sections": (
                generated.skill_sections
                if generated.skill_sections is not None
                else []
            ),
            "work_experiences": (
                generated.work_experiences
                if generated.work_experiences
                else base.work_experiences or []
            ),
            "projects": (
                generated.projects
                if generated.projects
                else base.projects or []
            ),
        },
    )
