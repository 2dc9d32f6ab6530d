from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from ..errors import ErrorKind
from .analysis import JobAnalysisResult, SkillMatch
from .document import ResumeDocument


class Stage(str, Enum):
    """Pipeline stages; exactly one is active at a time."""
    INPUT = "input"
    ANALYSIS = "analysis"
    SELECTION = "selection"
    GENERATION = "generation"
    COMPLETE = "complete"
    ERROR = "error"


class UploadedResume(BaseModel):
    """A resume file the user uploaded, already mapped to editor fields."""
    filename: str
    document: ResumeDocument


class GenerationSession(BaseModel):
    """Central state object for one run of the generator.

    This is the "traveling context" that accumulates data as it flows
    through: INPUT → ANALYSIS → SELECTION → GENERATION → COMPLETE.
    The editor's document is not part of it; the session only reads it.
    """
    stage: Stage = Stage.INPUT

    # === Input Stage ===
    job_description: str = Field(
        default="",
        description="Raw job description pasted by the user"
    )
    uploaded_resume: Optional[UploadedResume] = Field(
        default=None,
        description="Parsed upload; takes precedence over the live document"
    )

    # === Analysis Stage (AI output) ===
    analysis_result: Optional[JobAnalysisResult] = None
    skill_matches: List[SkillMatch] = Field(default_factory=list)

    # === Selection ===
    selected_skills: Set[str] = Field(
        default_factory=set,
        description="Skill names chosen for emphasis"
    )

    # === Errors ===
    error_message: str = ""
    error_kind: Optional[ErrorKind] = None
