"""
Command line entry point.

    quiz-toolkit detect FILE
    quiz-toolkit extract FILE... [--strategy S] [--format F] [--output PATH]
    quiz-toolkit analyze FILE

Files are read as RawDocuments (.pdf or .txt). Reports go to stdout as
JSON; exported quizzes go to --output or stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from quiz_toolkit import __version__
from quiz_toolkit.core.models import MergeStrategy
from quiz_toolkit.export import ExportFormat, ExportOptions, export_quiz
from quiz_toolkit.extractor import (
    RawDocument,
    UnsupportedDocumentError,
    detect_format,
    document_text,
    extract_raw_document,
    normalize_text,
)
from quiz_toolkit.merge import BatchProcessingError, process_batch

logger = logging.getLogger("quiz_toolkit")


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _cmd_detect(args: argparse.Namespace) -> int:
    document = RawDocument.from_path(args.file)
    text = document_text(document)
    result = detect_format(normalize_text(text), raw_text=text)
    _print_json(result.to_dict())
    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    documents = [RawDocument.from_path(path) for path in args.files]
    try:
        result = process_batch(documents, args.strategy)
    except BatchProcessingError as e:
        logger.error(str(e))
        for file_result in e.result.file_results:
            for error in file_result.errors:
                logger.error(f"  {file_result.file_name}: {error}")
        return 1

    for file_result in result.file_results:
        status = "ok" if file_result.success else "failed"
        logger.info(f"  {file_result.file_name}: {status}, {file_result.questions} questions")
    logger.info(
        f"{result.unique_questions} unique questions "
        f"({result.duplicates_removed} duplicates removed, {len(result.conflicts)} conflicts)"
    )

    options = ExportOptions(format=args.format, filename=args.output.stem if args.output else "quiz-export")
    exported = export_quiz(result.merged_quiz, options)
    if args.output:
        args.output.write_text(exported.content, encoding="utf-8")
        logger.info(f"Wrote {exported.size} bytes to {args.output}")
    else:
        print(exported.content)
    return 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    extraction = extract_raw_document(RawDocument.from_path(args.file))
    _print_json({
        "file": extraction.name,
        "detectedFormat": extraction.detection.detected_format.value,
        "analysis": extraction.analysis.to_dict(),
        "validation": extraction.validation.to_dict(),
    })
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-toolkit",
        description="Extract, merge and export quiz questions from documents",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Detect a document's question layout")
    detect.add_argument("file", type=Path)
    detect.set_defaults(handler=_cmd_detect)

    extract = subparsers.add_parser("extract", help="Extract and merge questions from documents")
    extract.add_argument("files", type=Path, nargs="+")
    extract.add_argument(
        "--strategy", "-s",
        choices=[s.value for s in MergeStrategy],
        default=MergeStrategy.SMART_MERGE.value,
        help="Merge strategy (default: smart-merge)",
    )
    extract.add_argument(
        "--format", "-f",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.JSON.value,
        help="Export format (default: json)",
    )
    extract.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")
    extract.set_defaults(handler=_cmd_extract)

    analyze = subparsers.add_parser("analyze", help="Report question quality for a document")
    analyze.add_argument("file", type=Path)
    analyze.set_defaults(handler=_cmd_analyze)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s',
        stream=sys.stderr,
    )

    try:
        return args.handler(args)
    except UnsupportedDocumentError as e:
        logger.error(f"{e.name}: {'; '.join(e.errors)}")
        return 1
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
