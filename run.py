"""
run.py

Command-line entry point.

Usage:
  python run.py                       # list upcoming assignments and open one
  python run.py --assist summarize    # also ask Ollama for feedback on each document
  python run.py files --limit 50      # list recent Drive files
"""
import argparse
import asyncio
import logging
import sys

import config

logger = logging.getLogger("main")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Open the Google Doc behind an upcoming Classroom assignment",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="assignments",
        choices=["assignments", "files"],
        help="assignments: pick an upcoming assignment; files: list Drive files",
    )
    parser.add_argument("--credentials", default=None, help="Path to the OAuth client secrets JSON")
    parser.add_argument("--token", default=None, help="Path to the cached OAuth token JSON")
    parser.add_argument(
        "--assist",
        choices=["summarize", "draft"],
        default=None,
        help="Send each opened document to Ollama for feedback or a draft",
    )
    parser.add_argument("--limit", type=int, default=config.DRIVE_LIST_LIMIT, help="Max Drive files to list")
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def build_assistant(mode):
    if mode is None:
        return None

    from services import ai_service

    if mode == "summarize":
        return ai_service.summarize_submission

    async def _draft(content: str, description: str) -> str:
        return await ai_service.complete_assignment(
            {"Description": description, "Current draft": content}
        )

    return _draft


async def run_assignments(credentials, assistant=None) -> None:
    from assignments.pipeline import run_pipeline
    from classroom.client import get_classroom_service, get_docs_service
    from classroom.coursework import ClassroomCourseWorkSource
    from classroom.submissions import ClassroomSubmissionSource
    from documents.resolver import GoogleDocumentResolver

    classroom = get_classroom_service(credentials)
    await run_pipeline(
        ClassroomCourseWorkSource(classroom),
        ClassroomSubmissionSource(classroom, credentials),
        GoogleDocumentResolver(get_docs_service(credentials), credentials),
        assistant=assistant,
    )


def run_files(credentials, limit: int) -> None:
    from classroom.client import get_drive_service
    from documents.drive import list_files

    files = list_files(get_drive_service(credentials), limit=limit)
    if not files:
        print("No files found")
        return
    print("Files:")
    for item in files:
        print(item.get("name", ""))


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    from assignments.errors import SourceUnavailable
    from classroom.client import get_credentials

    try:
        credentials = get_credentials(args.credentials, args.token)
        if args.command == "files":
            run_files(credentials, args.limit)
        else:
            asyncio.run(run_assignments(credentials, build_assistant(args.assist)))
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except SourceUnavailable as exc:
        logger.error("Classroom request failed: %s", exc)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
