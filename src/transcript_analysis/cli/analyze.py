"""
Command-line interface for transcript analysis.

Runs the heuristic pipeline, the Markdown report builder and the AI-assisted
analysis over transcript files.

Usage:
    # Heuristic analysis as JSON (blank lines separate transcripts)
    transcript-analysis analyze interviews.txt

    # One transcript per file, Markdown report in publication format
    transcript-analysis report transcripts/ --per-file --publication --output report.md

    # AI-assisted analysis with a model override
    transcript-analysis ai-analyze interviews.txt --question "How do users onboard?" \\
        --model ollama/llama3.1:8b

    # Read from stdin
    cat interviews.txt | transcript-analysis analyze -
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from ..ai import AIReportMeta, analyze_with_ai, generate_ai_report
from ..analysis import analyze_corpus
from ..exceptions import AIAnalysisError, NoDocumentsError, ResearchQuestionRequiredError
from ..logging_config import setup_logging
from ..parsing import clean_documents, require_documents, split_transcripts
from ..reporting import ReportMeta, build_markdown_report


logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_AI_ERROR = 1
EXIT_INPUT_ERROR = 2

TRANSCRIPT_SUFFIXES = (".txt", ".md")


# ============================================================================
# INPUT / OUTPUT
# ============================================================================

def expand_inputs(inputs: List[str]) -> List[str]:
    """
    Resolve input arguments to file paths.

    Directories contribute their ``.txt``/``.md`` files in name order;
    ``-`` (stdin) is passed through.
    """
    paths = []
    for item in inputs:
        if item == "-":
            paths.append(item)
            continue
        path = Path(item)
        if path.is_dir():
            paths.extend(
                str(p) for p in sorted(path.iterdir())
                if p.is_file() and p.suffix.lower() in TRANSCRIPT_SUFFIXES
            )
        elif path.is_file():
            paths.append(str(path))
        else:
            raise FileNotFoundError(f"Path not found: {path}")
    return paths


def read_documents(inputs: List[str], per_file: bool = False) -> List[str]:
    """
    Read transcripts from files (UTF-8) or stdin.

    Args:
        inputs: File paths, directories or ``-``
        per_file: Treat each file as one transcript instead of splitting on
            blank lines

    Returns:
        Ordered, cleaned transcripts (may be empty)
    """
    documents: List[str] = []
    for item in expand_inputs(inputs):
        if item == "-":
            text = sys.stdin.read()
        else:
            text = Path(item).read_text(encoding="utf-8")
        if per_file:
            documents.extend(clean_documents([text]))
        else:
            documents.extend(split_transcripts(text))

    logger.info("documents_loaded", inputs=len(inputs), documents=len(documents))
    return documents


def write_output(content: str, output_path: Optional[str]) -> None:
    """Write to ``output_path`` or print to stdout."""
    if not output_path:
        sys.stdout.write(content if content.endswith("\n") else content + "\n")
        return

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")

    logger.info("output_written", path=str(path), chars=len(content))


# ============================================================================
# COMMANDS
# ============================================================================

def run_analyze(args: argparse.Namespace) -> str:
    documents = require_documents(read_documents(args.inputs, args.per_file))
    result = analyze_corpus(documents)
    return json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2)


def run_report(args: argparse.Namespace) -> str:
    documents = require_documents(read_documents(args.inputs, args.per_file))
    meta = ReportMeta(
        title=args.title,
        author=args.author,
        methodology=args.methodology,
        methodology_variations=args.methodology_variations,
        participant_demographics=args.participant_demographics,
        additional_notes=args.additional_notes,
        publication_format=args.publication,
        institution=args.institution,
        corresponding_author=args.corresponding_author,
        email=args.email,
    )
    return build_markdown_report(meta, analyze_corpus(documents))


def run_ai_analyze(args: argparse.Namespace) -> str:
    documents = read_documents(args.inputs, args.per_file)
    analysis = analyze_with_ai(documents, args.question, model_override=args.model)
    return json.dumps(analysis.model_dump(by_alias=True), ensure_ascii=False, indent=2)


def run_ai_report(args: argparse.Namespace) -> str:
    documents = read_documents(args.inputs, args.per_file)
    analysis = analyze_with_ai(documents, args.question, model_override=args.model)
    meta = AIReportMeta(
        research_question=args.question,
        title=args.title,
        author=args.author,
        methodology=args.methodology,
        participant_demographics=args.participant_demographics,
        additional_notes=args.additional_notes,
        institution=args.institution,
    )
    return generate_ai_report(meta, analysis, transcript_count=len(documents))


COMMANDS = {
    "analyze": run_analyze,
    "report": run_report,
    "ai-analyze": run_ai_analyze,
    "ai-report": run_ai_report,
}


# ============================================================================
# MAIN CLI
# ============================================================================

def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Transcript files, directories of .txt/.md files, or '-' for stdin"
    )
    parser.add_argument(
        "--per-file",
        action="store_true",
        help="Treat each file as a single transcript (default: split on blank lines)"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)"
    )


def _add_report_metadata(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", default=None, help="Report title")
    parser.add_argument("--author", default=None, help="Author line")
    parser.add_argument("--methodology", default=None, help="Methodology text")
    parser.add_argument(
        "--participant-demographics", default=None, help="Participant information"
    )
    parser.add_argument("--additional-notes", default=None, help="Additional notes section")
    parser.add_argument("--institution", default=None, help="Institution")


def _add_ai_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--question",
        "-q",
        required=True,
        help="Research question guiding the analysis"
    )
    parser.add_argument(
        "--model",
        "-m",
        type=str,
        default=None,
        help="Override LLM model (format: provider/model-name, e.g., 'gemini/gemini-2.0-flash')"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-analysis",
        description="Qualitative analysis of interview transcripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported models (ai-analyze, ai-report):
  - gemini/<model>      (e.g., gemini/gemini-2.0-flash) - requires LLM_API_KEY
  - openai/<model>      (e.g., openai/gpt-4o-mini) - requires LLM_API_KEY
  - deepseek/<model>    (e.g., deepseek/deepseek-chat) - requires LLM_API_KEY
  - openrouter/<model>  - requires LLM_API_KEY
  - ollama/<model>:<tag> (e.g., ollama/llama3.1:8b)
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Heuristic analysis as JSON")
    _add_common_arguments(analyze)

    report = subparsers.add_parser("report", help="Heuristic analysis as a Markdown report")
    _add_common_arguments(report)
    _add_report_metadata(report)
    report.add_argument(
        "--publication",
        action="store_true",
        help="Use the paper-style publication template"
    )
    report.add_argument("--methodology-variations", default=None)
    report.add_argument("--corresponding-author", default=None)
    report.add_argument("--email", default=None)

    ai_analyze = subparsers.add_parser("ai-analyze", help="AI-assisted analysis as JSON")
    _add_common_arguments(ai_analyze)
    _add_ai_arguments(ai_analyze)

    ai_report = subparsers.add_parser("ai-report", help="AI-assisted Markdown report")
    _add_common_arguments(ai_report)
    _add_ai_arguments(ai_report)
    _add_report_metadata(ai_report)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 success, 2 input error, 1 AI analysis failure
    """
    args = build_parser().parse_args(argv)
    setup_logging(stream=sys.stderr)

    try:
        content = COMMANDS[args.command](args)
        write_output(content, args.output)

    except (NoDocumentsError, ResearchQuestionRequiredError, OSError, UnicodeDecodeError) as e:
        logger.error("cli_input_error", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    except AIAnalysisError as e:
        logger.error("cli_ai_error", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_AI_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
