"""Core pipeline logic for the resume builder."""

from .pipeline import ResumeGenerator, ERROR_MESSAGES
from .intake import ResumeUpload, parse_upload, map_structured_resume, load_document
from .analysis import analyze_job
from .generation import generate_content, merge_generated
from .matching import is_skill_present, build_skill_matches, initial_selection, toggle_skill
from .job_functions import JobFunctionSelection, filter_categories
from .builder import render_preview, save_document, BuildError

__all__ = [
    "ResumeGenerator",
    "ERROR_MESSAGES",
    "ResumeUpload",
    "parse_upload",
    "map_structured_resume",
    "load_document",
    "analyze_job",
    "generate_content",
    "merge_generated",
    "is_skill_present",
    "build_skill_matches",
    "initial_selection",
    "toggle_skill",
    "JobFunctionSelection",
    "filter_categories",
    "render_preview",
    "save_document",
    "BuildError",
]
