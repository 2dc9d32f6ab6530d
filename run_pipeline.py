"""Run the AI resume generation pipeline against a job description."""

import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from resume_builder.core import (
    ResumeGenerator,
    ResumeUpload,
    load_document,
    render_preview,
    save_document,
)
from resume_builder.errors import ValidationError
from resume_builder.models import AppConfig, ResumeDocument, Stage
from resume_builder.services import LLMService, PdfResumeParser, build_ai_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("job_description", type=Path, help="Text file with the job description")
    parser.add_argument("--document", type=Path, help="Current resume document (.yaml/.json)")
    parser.add_argument("--resume", type=Path, help="Existing resume PDF to enhance")
    parser.add_argument(
        "--toggle",
        action="append",
        default=[],
        metavar="SKILL",
        help="Toggle a skill in the pre-selected set (repeatable)",
    )
    parser.add_argument("--output", type=Path, default=Path("output/resume.yaml"))
    return parser.parse_args()


async def run_pipeline(args: argparse.Namespace) -> int:
    """Run the full pipeline and display results."""
    config = AppConfig()

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.document:
        document = load_document(args.document)
    else:
        document = ResumeDocument(selected_template=config.default_template)
    job_description = args.job_description.read_text(encoding="utf-8")

    print("=" * 60)
    print("RESUME BUILDER - AI Generation")
    print("=" * 60)
    print(f"\n📋 JD Preview: {job_description[:100].strip()}...")
    print(f"🔧 Backend: {config.backend}")
    print("\n" + "=" * 60)

    parser = PdfResumeParser(LLMService(config.llm), config.parser)

    async with build_ai_client(config) as ai_client:
        generator = ResumeGenerator(
            document,
            ai_client,
            parser,
            default_experience_level=config.default_experience_level,
        )

        if args.resume:
            try:
                uploaded = await generator.upload_resume(ResumeUpload.from_path(args.resume))
            except ValidationError as e:
                print(f"\n❌ {e}")
                return 1
            if uploaded is None:
                print(f"\n⚠️  {generator.error_message}")
            else:
                print(f"\n📄 Using uploaded resume: {uploaded.filename}")

        try:
            await generator.analyze(job_description)
        except ValidationError as e:
            print(f"\n❌ {e}")
            return 1
        if generator.stage == Stage.ERROR:
            print(f"\n❌ Analysis failed: {generator.error_message}")
            return 1

        print("\n📌 SKILLS FOUND IN JOB DESCRIPTION:")
        for match in generator.session.skill_matches:
            flags = [match.importance]
            if match.required:
                flags.append("required")
            if match.present:
                flags.append("present")
            print(f"   • {match.name} ({', '.join(flags)})")

        for skill in args.toggle:
            generator.toggle_skill(skill)

        selected = sorted(generator.session.selected_skills)
        print(f"\n🎯 SELECTED FOR EMPHASIS ({len(selected)}): {', '.join(selected)}")

        if not selected:
            print("\nNothing selected; use --toggle SKILL to pick skills to emphasize.")
            return 1

        await generator.generate()
        if generator.stage == Stage.ERROR:
            print(f"\n❌ Generation failed: {generator.error_message}")
            return 1

    print("\n✅ RESUME GENERATED\n")
    print(render_preview(generator.document))

    save_document(generator.document, args.output)
    print("=" * 60)
    print(f"📄 Output: {args.output}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(run_pipeline(parse_args())))
