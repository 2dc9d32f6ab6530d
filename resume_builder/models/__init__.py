"""Pydantic models for the resume builder."""

from .document import (
    ResumeDocument,
    SkillGroup,
    WorkExperience,
    ProjectEntry,
    Education,
    move_entry,
    flatten_skills,
)
from .analysis import (
    ExtractedSkill,
    SkillMatch,
    MatchAnalysis,
    JobAnalysisResult,
    GeneratedContent,
)
from .parsed import (
    StructuredResume,
    ParsedProfile,
    ParsedWorkExperience,
    ParsedEducation,
    ParsedProject,
    ParsedSkills,
    FeaturedSkill,
)
from .category import JobCategory, JobSubcategory, CategoryListResponse
from .state import Stage, GenerationSession, UploadedResume
from .config import AppConfig, ApiConfig, LLMConfig, ParserConfig

__all__ = [
    "ResumeDocument",
    "SkillGroup",
    "WorkExperience",
    "ProjectEntry",
    "Education",
    "move_entry",
    "flatten_skills",
    "ExtractedSkill",
    "SkillMatch",
    "MatchAnalysis",
    "JobAnalysisResult",
    "GeneratedContent",
    "StructuredResume",
    "ParsedProfile",
    "ParsedWorkExperience",
    "ParsedEducation",
    "ParsedProject",
    "ParsedSkills",
    "FeaturedSkill",
    "JobCategory",
    "JobSubcategory",
    "CategoryListResponse",
    "Stage",
    "GenerationSession",
    "UploadedResume",
    "AppConfig",
    "ApiConfig",
    "LLMConfig",
    "ParserConfig",
]
