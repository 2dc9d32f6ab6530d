"""Build stage - Jinja2 preview rendering and document export."""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from jinja2 import Environment, FileSystemLoader, TemplateError

from ..models import ResumeDocument

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
PREVIEW_TEMPLATE = "resume.md.j2"


class BuildError(Exception):
    """Raised when a resume preview or export fails."""
    pass


def create_jinja_env(template_dir: Path) -> Environment:
    """Create a Jinja2 environment for Markdown output."""
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=False,  # Markdown output, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["date_range"] = date_range
    return env


def date_range(entry) -> str:
    """Format an entry's start/end dates as "start - end"."""
    parts = [
        part for part in (getattr(entry, "start_date", None), getattr(entry, "end_date", None))
        if part
    ]
    return " - ".join(parts)


def render_preview(
    document: ResumeDocument,
    template_dir: Optional[Path] = None,
) -> str:
    """Render the working resume as Markdown for previewing.

    Raises:
        BuildError: If the template is missing or fails to render
    """
    template_dir = template_dir or TEMPLATE_DIR
    template_path = template_dir / PREVIEW_TEMPLATE

    if not template_path.exists():
        raise BuildError(f"Template not found: {template_path}")

    env = create_jinja_env(template_dir)
    try:
        return env.get_template(PREVIEW_TEMPLATE).render(resume=document)
    except TemplateError as e:
        raise BuildError(f"Template rendering failed: {e}") from e


def save_document(document: ResumeDocument, path: Path) -> Path:
    """Write the document as YAML or JSON, chosen by file suffix."""
    payload = document.to_payload()
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix in (".yaml", ".yml"):
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(payload, indent=2, ensure_ascii=False)

    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote resume document: {path}")
    return path
