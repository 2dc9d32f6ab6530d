"""Intake stage - uploaded resume validation, parsing and field mapping."""

import json
import logging
import mimetypes
import os
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import yaml
from pydantic import BaseModel

from ..errors import ResumeParseError, ValidationError
from ..models import (
    Education,
    ProjectEntry,
    ResumeDocument,
    SkillGroup,
    StructuredResume,
    WorkExperience,
)
from ..services import ResumeParser

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_TEMPLATE = "simple"

_DATE_SEPARATOR = re.compile(r"\s+(?:-|–|—|to)\s+|\s*[–—]\s*", re.IGNORECASE)


class ResumeUpload(BaseModel):
    """A file handed to the generator by the user."""
    filename: str
    content_type: Optional[str] = None
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> "ResumeUpload":
        """Read a local file, guessing its type from the extension."""
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, content_type=content_type, data=path.read_bytes())


def validate_upload(upload: ResumeUpload) -> None:
    """Reject anything not declared as a PDF."""
    if upload.content_type != PDF_CONTENT_TYPE:
        raise ValidationError("Please upload a PDF file")


@contextmanager
def staged_upload(upload: ResumeUpload) -> Iterator[str]:
    """Write the upload to a temporary file and yield its ``file://`` URL.

    The file is removed when the block exits, whether parsing succeeded
    or not.
    """
    suffix = Path(upload.filename).suffix or ".pdf"
    fd, name = tempfile.mkstemp(prefix="resume-upload-", suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(upload.data)
        yield path.as_uri()
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Released staged upload {path.name}")


async def parse_upload(
    upload: ResumeUpload,
    parser: ResumeParser,
    selected_template: Optional[str] = None,
) -> ResumeDocument:
    """Validate, parse and map an uploaded resume into editor fields.

    Raises:
        ValidationError: If the file is not a PDF
        ResumeParseError: If the parser fails for any reason
    """
    validate_upload(upload)

    logger.info(f"Parsing uploaded resume: {upload.filename} ({len(upload.data)} bytes)")
    with staged_upload(upload) as file_url:
        try:
            structured = await parser.parse(file_url)
        except Exception as e:
            logger.error(f"Failed to parse resume {upload.filename}: {e}")
            raise ResumeParseError(
                "Failed to parse the uploaded resume. Please try a different file."
            ) from e

    return map_structured_resume(structured, selected_template)


def load_document(path: Path) -> ResumeDocument:
    """Load an editor document from a YAML or JSON file.

    Useful for:
    - Running the pipeline outside the editor
    - Testing without an upload
    """
    if not path.exists():
        raise FileNotFoundError(f"Resume document not found: {path}")

    with path.open(encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    document = ResumeDocument.model_validate(data)
    logger.info(f"Loaded resume document from {path}")
    return document


def split_date_range(date: str) -> Tuple[Optional[str], Optional[str]]:
    """Split "Jan 2020 - Present" into ("Jan 2020", "Present")."""
    date = date.strip()
    if not date:
        return None, None

    parts = _DATE_SEPARATOR.split(date, maxsplit=1)
    if len(parts) == 1:
        return parts[0], None
    start, end = (part.strip() or None for part in parts)
    return start, end


def _join_lines(lines: List[str]) -> Optional[str]:
    text = "\n".join(line.strip() for line in lines if line.strip())
    return text or None


def _split_name(name: str) -> Tuple[Optional[str], Optional[str]]:
    parts = name.split()
    if not parts:
        return None, None
    if len(parts) == 1:
        return parts[0], None
    return " ".join(parts[:-1]), parts[-1]


def _split_location(location: str) -> Tuple[Optional[str], Optional[str]]:
    if not location.strip():
        return None, None
    city, _, country = location.partition(",")
    return city.strip() or None, country.strip() or None


def _skill_groups(structured: StructuredResume) -> List[SkillGroup]:
    """Featured skills plus "Category: a, b" description lines as groups."""
    groups: List[SkillGroup] = []

    featured = [s.skill.strip() for s in structured.skills.featured_skills if s.skill.strip()]
    if featured:
        groups.append(SkillGroup(name="Featured Skills", skills=featured))

    uncategorized: List[str] = []
    for line in structured.skills.descriptions:
        category, sep, items = line.partition(":")
        if not sep:
            items, category = line, ""
        skills = [item.strip() for item in items.split(",") if item.strip()]
        if not skills:
            continue
        if category.strip():
            groups.append(SkillGroup(name=category.strip(), skills=skills))
        else:
            uncategorized.extend(skills)

    if uncategorized:
        groups.append(SkillGroup(name="Skills", skills=uncategorized))
    return groups


def map_structured_resume(
    structured: StructuredResume,
    selected_template: Optional[str] = None,
) -> ResumeDocument:
    """Map parser output onto the editor's resume fields."""
    profile = structured.profile
    first_name, last_name = _split_name(profile.name)
    city, country = _split_location(profile.location)

    work_experiences = []
    for entry in structured.work_experiences:
        start, end = split_date_range(entry.date)
        work_experiences.append(WorkExperience(
            position=entry.job_title or None,
            company=entry.company or None,
            start_date=start,
            end_date=end,
            description=_join_lines(entry.descriptions),
        ))

    projects = []
    for entry in structured.projects:
        start, end = split_date_range(entry.date)
        projects.append(ProjectEntry(
            title=entry.project or None,
            description=_join_lines(entry.descriptions),
            start_date=start,
            end_date=end,
        ))

    educations = []
    for entry in structured.educations:
        start, end = split_date_range(entry.date)
        educations.append(Education(
            degree=entry.degree or None,
            school=entry.school or None,
            start_date=start,
            end_date=end,
        ))

    return ResumeDocument(
        first_name=first_name,
        last_name=last_name,
        email=profile.email or None,
        phone=profile.phone or None,
        city=city,
        country=country,
        website=profile.url or None,
        summary=profile.summary or None,
        skill_sections=_skill_groups(structured),
        work_experiences=work_experiences,
        projects=projects,
        educations=educations,
        selected_template=selected_template or DEFAULT_TEMPLATE,
    )
