"""Resume Generator - AI resume generation pipeline controller.

Implements a state machine over the generation stages. Only one stage is
active at a time and every transition is checked against TRANSITIONS.
"""

from typing import Callable, Dict, FrozenSet, List, Optional
import logging
import uuid

from ..errors import (
    ErrorKind,
    ResumeBuilderError,
    ResumeParseError,
    UnknownError,
    ValidationError,
)
from ..models import (
    GenerationSession,
    ResumeDocument,
    Stage,
    UploadedResume,
    flatten_skills,
)
from ..services import AIClient, ResumeParser
from .analysis import analyze_job
from .generation import DEFAULT_EXPERIENCE_LEVEL, generate_content, merge_generated
from .intake import ResumeUpload, parse_upload
from .matching import build_skill_matches, initial_selection, toggle_skill

logger = logging.getLogger(__name__)

DocumentListener = Callable[[ResumeDocument], None]

# User-facing messages per failing stage and error kind
ERROR_MESSAGES: Dict[Stage, Dict[ErrorKind, str]] = {
    Stage.ANALYSIS: {
        ErrorKind.REQUEST: "Failed to analyze job description",
        ErrorKind.PARSE: "Failed to parse analysis results",
        ErrorKind.UNKNOWN: "Analysis failed",
    },
    Stage.GENERATION: {
        ErrorKind.REQUEST: "Failed to generate resume",
        ErrorKind.PARSE: "Failed to parse generated resume",
        ErrorKind.UNKNOWN: "Resume generation failed",
    },
}


class ResumeGenerator:
    """State machine controller for the AI resume generation pipeline.

    Manages the flow: INPUT → ANALYSIS → SELECTION → GENERATION → COMPLETE,
    with ERROR reachable from both awaiting stages.

    Analysis and generation share a single-flight run token; uploading a
    resume is guarded by its own flag and may overlap with them. The
    editor document is replaced only when a generation run succeeds.

    Usage:
        generator = ResumeGenerator(document, ai_client, parser)
        await generator.analyze(job_description)
        generator.toggle_skill("Go")
        await generator.generate()
        merged = generator.document
    """

    # Legal stage transitions: current -> allowed next stages
    TRANSITIONS: Dict[Stage, FrozenSet[Stage]] = {
        Stage.INPUT: frozenset({Stage.ANALYSIS}),
        Stage.ANALYSIS: frozenset({Stage.SELECTION, Stage.ERROR}),
        Stage.SELECTION: frozenset({Stage.GENERATION, Stage.INPUT}),
        Stage.GENERATION: frozenset({Stage.COMPLETE, Stage.ERROR}),
        Stage.COMPLETE: frozenset({Stage.INPUT}),
        Stage.ERROR: frozenset({Stage.INPUT, Stage.SELECTION}),
    }

    def __init__(
        self,
        document: ResumeDocument,
        ai_client: AIClient,
        parser: Optional[ResumeParser] = None,
        on_document_change: Optional[DocumentListener] = None,
        default_experience_level: str = DEFAULT_EXPERIENCE_LEVEL,
    ):
        self._document = document
        self.ai_client = ai_client
        self.parser = parser
        self.on_document_change = on_document_change
        self.default_experience_level = default_experience_level
        self._session = GenerationSession()
        self._run_token: Optional[str] = None
        self._uploading = False

    # === Read-only state ===

    @property
    def stage(self) -> Stage:
        return self._session.stage

    @property
    def document(self) -> ResumeDocument:
        return self._document

    @property
    def session(self) -> GenerationSession:
        return self._session

    @property
    def is_processing(self) -> bool:
        return self._run_token is not None

    @property
    def is_uploading_resume(self) -> bool:
        return self._uploading

    @property
    def error_message(self) -> str:
        return self._session.error_message

    def base_resume(self) -> ResumeDocument:
        """The uploaded resume if one was parsed, else the live document."""
        if self._session.uploaded_resume is not None:
            return self._session.uploaded_resume.document
        return self._document

    def current_skills(self) -> List[str]:
        return flatten_skills(self.base_resume())

    # === State machine plumbing ===

    def _transition(self, target: Stage) -> None:
        """Move to ``target`` if the transition table allows it."""
        current = self._session.stage
        if target not in self.TRANSITIONS[current]:
            raise ValidationError(
                f"Cannot move from {current.value} to {target.value}"
            )

        logger.debug(f"Transitioning: {current.value} → {target.value}")
        self._session.stage = target

    def _require_stage(self, *stages: Stage) -> None:
        if self._session.stage not in stages:
            allowed = ", ".join(stage.value for stage in stages)
            raise ValidationError(
                f"Action not available in stage {self._session.stage.value} "
                f"(expected {allowed})"
            )

    def _reject(self, message: str) -> None:
        """Record an inline validation error and raise it."""
        self._session.error_message = message
        self._session.error_kind = ErrorKind.VALIDATION
        raise ValidationError(message)

    def _begin_run(self) -> str:
        if self._run_token is not None:
            self._reject("Another request is already in progress")
        self._run_token = uuid.uuid4().hex
        return self._run_token

    def _end_run(self, token: str) -> None:
        if self._run_token == token:
            self._run_token = None

    def _fail(self, stage: Stage, error: Exception) -> None:
        """Route a failed analysis/generation call to the ERROR stage."""
        if not isinstance(error, ResumeBuilderError):
            error = UnknownError(str(error))

        messages = ERROR_MESSAGES[stage]
        if error.kind in (ErrorKind.REQUEST, ErrorKind.PARSE):
            message = messages[error.kind]
        else:
            message = str(error) or messages[ErrorKind.UNKNOWN]

        logger.error(f"Stage {stage.value} failed ({error.kind.value}): {error}")
        self._session.error_message = message
        self._session.error_kind = error.kind
        self._transition(Stage.ERROR)

    def _clear_error(self) -> None:
        self._session.error_message = ""
        self._session.error_kind = None

    # === Intake ===

    async def upload_resume(self, upload: ResumeUpload) -> Optional[UploadedResume]:
        """Parse an uploaded PDF resume to use as the generation base.

        Never changes the pipeline stage. On failure the previous upload
        (if any) is kept and the error is shown inline.

        Raises:
            ValidationError: If the file is not a PDF or an upload is running
        """
        if self._uploading:
            self._reject("A resume is already being uploaded")
        if self.parser is None:
            self._reject("Resume upload is not available")

        self._uploading = True
        self._clear_error()
        try:
            document = await parse_upload(
                upload,
                self.parser,
                selected_template=self._document.selected_template,
            )
        except ValidationError as e:
            self._session.error_message = str(e)
            self._session.error_kind = e.kind
            raise
        except ResumeParseError as e:
            self._session.error_message = str(e)
            self._session.error_kind = e.kind
            return None
        finally:
            self._uploading = False

        uploaded = UploadedResume(filename=upload.filename, document=document)
        self._session.uploaded_resume = uploaded
        logger.info(f"Using uploaded resume {upload.filename} as generation base")
        return uploaded

    def remove_uploaded_resume(self) -> None:
        self._session.uploaded_resume = None
        self._clear_error()

    # === Analysis ===

    async def analyze(self, job_description: str) -> Stage:
        """INPUT → ANALYSIS → SELECTION (or ERROR).

        Raises:
            ValidationError: If the description is blank, the stage is not
                INPUT, or another request is in flight
        """
        self._require_stage(Stage.INPUT)
        if not job_description.strip():
            self._reject("Job description is required")

        token = self._begin_run()
        try:
            self._session.job_description = job_description
            self._clear_error()
            self._transition(Stage.ANALYSIS)

            current_skills = self.current_skills()
            try:
                result = await analyze_job(self.ai_client, job_description, current_skills)
            except Exception as e:
                self._fail(Stage.ANALYSIS, e)
                return self.stage

            matches = build_skill_matches(result, current_skills)
            self._session.analysis_result = result
            self._session.skill_matches = matches
            self._session.selected_skills = initial_selection(matches)

            logger.info(
                f"{sum(m.present for m in matches)}/{len(matches)} skills present, "
                f"{len(self._session.selected_skills)} pre-selected"
            )
            self._transition(Stage.SELECTION)
            return self.stage
        finally:
            self._end_run(token)

    # === Selection ===

    def toggle_skill(self, skill: str) -> None:
        """Add or remove one skill from the selection."""
        self._require_stage(Stage.SELECTION)
        self._session.selected_skills = toggle_skill(self._session.selected_skills, skill)

    def back(self) -> None:
        """SELECTION → INPUT, keeping the analysis for a later retry."""
        self._transition(Stage.INPUT)

    # === Generation ===

    async def generate(self) -> Stage:
        """SELECTION → GENERATION → COMPLETE (or ERROR).

        Raises:
            ValidationError: If no skill is selected, the stage is not
                SELECTION, or another request is in flight
        """
        self._require_stage(Stage.SELECTION)
        if not self._session.selected_skills:
            self._reject("Select at least one skill to emphasize")

        token = self._begin_run()
        try:
            self._clear_error()
            self._transition(Stage.GENERATION)

            base = self.base_resume()
            result = self._session.analysis_result
            experience_level = (
                result.experience_level if result and result.experience_level
                else self.default_experience_level
            )

            try:
                generated = await generate_content(
                    self.ai_client,
                    self._session.job_description,
                    sorted(self._session.selected_skills),
                    base,
                    experience_level,
                )
                merged = merge_generated(base, generated)
            except Exception as e:
                self._fail(Stage.GENERATION, e)
                return self.stage

            self._document = merged
            if self.on_document_change is not None:
                self.on_document_change(merged)

            logger.info("Generated resume merged into the working document")
            self._transition(Stage.COMPLETE)
            return self.stage
        finally:
            self._end_run(token)

    # === Recovery ===

    def start_over(self) -> None:
        """ERROR → INPUT."""
        self._require_stage(Stage.ERROR)
        self._clear_error()
        self._transition(Stage.INPUT)

    def try_again(self) -> None:
        """ERROR → SELECTION if skill matches exist, else ERROR → INPUT."""
        self._require_stage(Stage.ERROR)
        self._clear_error()
        if self._session.skill_matches:
            self._transition(Stage.SELECTION)
        else:
            self._transition(Stage.INPUT)

    def generate_another(self) -> None:
        """COMPLETE → INPUT, clearing everything but the merged document
        and the uploaded resume."""
        self._require_stage(Stage.COMPLETE)
        self._transition(Stage.INPUT)
        self._session = GenerationSession(uploaded_resume=self._session.uploaded_resume)
        logger.info("Session reset for another generation")
