"""External service integrations."""

from .ai_client import AIClient, HttpAIClient, build_ai_client
from .category_service import CategoryService, CategoryServiceError
from .llm_service import LLMService
from .resume_parser import ResumeParser, PdfResumeParser, file_url_to_path
from .streaming import drain_stream, extract_json_object, find_json_object

__all__ = [
    "AIClient",
    "HttpAIClient",
    "build_ai_client",
    "CategoryService",
    "CategoryServiceError",
    "LLMService",
    "ResumeParser",
    "PdfResumeParser",
    "file_url_to_path",
    "drain_stream",
    "extract_json_object",
    "find_json_object",
]
