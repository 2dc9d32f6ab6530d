"""Analysis stage - job description skill extraction."""

import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from ..errors import ParseError, ValidationError
from ..models import JobAnalysisResult
from ..services import AIClient, drain_stream, extract_json_object

logger = logging.getLogger(__name__)


async def analyze_job(
    client: AIClient,
    job_description: str,
    current_skills: List[str],
) -> JobAnalysisResult:
    """ANALYSIS stage: Extract a skill/requirement model from a job description.

    This stage:
    1. Sends the job description and current skills to the analysis service
    2. Drains the streamed response completely
    3. Extracts the first JSON object from the text
    4. Validates it as a JobAnalysisResult

    Args:
        client: Source of the streamed analysis response
        job_description: Raw job description text
        current_skills: Flattened skills of the candidate's resume

    Returns:
        The validated analysis result

    Raises:
        ValidationError: If the job description is blank
        RequestError: If the service call fails
        ParseError: If the response does not contain a valid result
    """
    if not job_description.strip():
        raise ValidationError("Job description is required")

    payload = {
        "jobDescription": job_description,
        "currentSkills": list(current_skills),
    }

    logger.info(f"Analyzing job description ({len(job_description)} chars, "
                f"{len(current_skills)} current skills)")
    text = await drain_stream(client.stream_analysis(payload))

    try:
        data = extract_json_object(text)
        result = JobAnalysisResult.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(f"Analysis response failed validation: {text[:200]!r}")
        raise ParseError(f"Analysis response failed validation: {e.error_count()} errors") from e
    except ParseError:
        logger.warning(f"Failed to parse analysis response: {text[:200]!r}")
        raise

    logger.info(
        f"Extracted {len(result.extracted_skills)} skills "
        f"(experience level: {result.experience_level or 'unspecified'})"
    )
    return result
