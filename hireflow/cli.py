"""
Command line interface for HireFlow.

This module exposes subcommands to run each part of the screening flow
without the web UI: parsing a single résumé, screening a batch of
résumés against a job description file, formatting a report from saved
results, serving the Flask UI and cleaning up old sessions.  The CLI is
intentionally lightweight and delegates most of the work to functions
in the `resume`, `pipeline`, `report` and `store` packages.

Résumé parsing relies on the configured LLM provider by default, with
the heuristic parser used when ``--no-use-llm`` is given or no provider
is configured.
"""

from __future__ import annotations

import argparse
import glob
import json
import logging
import os
import sys
from typing import List

import yaml  # type: ignore
from tqdm import tqdm

from .config import load_config
from .jobs.schema import InvalidJobDescription, load_job_requirements
from .llm.providers import get_default_provider
from .pipeline.screening import ResumeUpload, screen_candidates
from .report.export import (
    format_candidate_profile,
    format_detailed_report,
    format_top_summary,
    results_from_json,
    results_to_json,
    write_results_csv,
)
from .resume.parse_resume import UnsupportedResumeFormat, parse_resume, save_candidate_json
from .store.session import SessionStore

logger = logging.getLogger("hireflow.cli")

EXIT_INVALID_INPUT = 2


def _fail(message: str, *args: object) -> None:
    logger.error(message, *args)
    sys.exit(EXIT_INVALID_INPUT)


def _expand_resume_paths(patterns: List[str]) -> List[str]:
    paths: List[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern)) if glob.has_magic(pattern) else [pattern]
        paths.extend(matches)
    return paths


def cmd_resume_parse(args: argparse.Namespace) -> None:
    """Parse a résumé file and write the candidate JSON.

    This command attempts to parse the résumé using an LLM provider by
    default.  If ``--no-use-llm`` is provided or the LLM provider is not
    configured, the heuristic parser is used.
    """
    provider = get_default_provider(args.config_data) if args.use_llm else None
    try:
        candidate = parse_resume(args.file, use_llm=args.use_llm, provider=provider)
    except (UnsupportedResumeFormat, FileNotFoundError) as exc:
        _fail("Cannot read résumé %s: %s", args.file, exc)
    save_candidate_json(candidate, args.out)
    logger.info("Resume parsed (%s) and saved to %s", candidate.parsing_method, args.out)


def cmd_screen(args: argparse.Namespace) -> None:
    """Screen résumés against a job description and write ranked results."""
    config = args.config_data
    try:
        job = load_job_requirements(args.job)
    except (FileNotFoundError, InvalidJobDescription, json.JSONDecodeError, yaml.YAMLError) as exc:
        _fail("Cannot read job description %s: %s", args.job, exc)
    if args.top_n is not None:
        job.top_n_candidates = args.top_n
    try:
        job.validate()
    except InvalidJobDescription as exc:
        _fail("Invalid job description %s: %s", args.job, exc)

    paths = _expand_resume_paths(args.resumes)
    if not paths:
        _fail("No résumés matched %s", " ".join(args.resumes))
    uploads = [ResumeUpload(file_name=os.path.basename(p), path=p) for p in paths]
    use_llm = args.use_llm and bool(config["screening"].get("use_llm_parsing", True))
    provider = get_default_provider(config)

    with tqdm(total=len(uploads), desc="Screening", unit="candidate") as pbar:

        def progress(index: int, total: int, name: str) -> None:
            pbar.set_postfix_str(name)
            pbar.update(1)

        analyses = screen_candidates(
            uploads, job, provider=provider, use_llm_parsing=use_llm, progress=progress
        )

    with open(args.out, "w", encoding="utf-8") as f:
        f.write(results_to_json(analyses))
    if args.csv:
        write_results_csv(analyses, args.csv)
        logger.info("Wrote CSV summary to %s", args.csv)
    logger.info("Wrote %d ranked candidates to %s", len(analyses), args.out)
    print(format_top_summary(analyses))


def cmd_report(args: argparse.Namespace) -> None:
    """Format a text report from saved screening results."""
    try:
        with open(args.results, "r", encoding="utf-8") as f:
            analyses = results_from_json(f.read())
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        _fail("Cannot read screening results %s: %s", args.results, exc)
    if args.kind == "summary":
        content = format_top_summary(analyses)
    elif args.kind == "detailed":
        content = format_detailed_report(analyses)
    else:
        selected = [a for a in analyses if a.rank == args.rank]
        if not selected:
            _fail("No candidate with rank %d in %s", args.rank, args.results)
        content = format_candidate_profile(selected[0])
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info("Report written to %s", args.out)
    else:
        print(content)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the Flask UI."""
    from .web.app import create_app

    app = create_app(args.config_data)
    app.run(host=args.host, port=args.port, debug=args.debug)


def cmd_sessions_cleanup(args: argparse.Namespace) -> None:
    """Remove screening sessions older than the retention period."""
    sessions = args.config_data["sessions"]
    days = args.days if args.days is not None else int(sessions["retention_days"])
    removed = SessionStore(sessions["base_dir"]).cleanup_old_sessions(days)
    logger.info("Removed %d sessions older than %d days", len(removed), days)


def _add_llm_flags(cmd: argparse.ArgumentParser) -> None:
    # LLM parsing flags: --use-llm (default) and --no-use-llm to disable
    llm_group = cmd.add_mutually_exclusive_group()
    llm_group.add_argument(
        "--use-llm",
        dest="use_llm",
        action="store_true",
        default=True,
        help="Enable LLM parsing for résumés (default)",
    )
    llm_group.add_argument(
        "--no-use-llm",
        dest="use_llm",
        action="store_false",
        help="Disable LLM parsing and use the heuristic parser",
    )


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="hireflow", description="HireFlow candidate screening CLI")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Resume parse
    resume_parser = subparsers.add_parser("resume", help="Résumé related commands")
    resume_sub = resume_parser.add_subparsers(dest="subcommand", required=True)
    parse_resume_cmd = resume_sub.add_parser("parse", help="Parse a résumé file")
    parse_resume_cmd.add_argument("--file", required=True, help="Path to résumé file (pdf, docx, txt, md)")
    parse_resume_cmd.add_argument("--out", required=True, help="Path to output JSON file")
    _add_llm_flags(parse_resume_cmd)
    parse_resume_cmd.set_defaults(func=cmd_resume_parse)

    # Screen
    screen_cmd = subparsers.add_parser("screen", help="Screen résumés against a job description")
    screen_cmd.add_argument("--job", required=True, help="Job description YAML or JSON file")
    screen_cmd.add_argument("--resumes", required=True, nargs="+", help="Résumé files or glob patterns")
    screen_cmd.add_argument("--out", default="results.json", help="Output JSON path")
    screen_cmd.add_argument("--csv", help="Optional CSV summary path")
    screen_cmd.add_argument("--top-n", type=int, dest="top_n", help="Number of candidates to keep")
    _add_llm_flags(screen_cmd)
    screen_cmd.set_defaults(func=cmd_screen)

    # Report
    report_cmd = subparsers.add_parser("report", help="Format a report from results JSON")
    report_cmd.add_argument("--results", required=True, help="Path to results JSON")
    report_cmd.add_argument(
        "--kind", choices=["summary", "detailed", "profile"], default="summary", help="Report type"
    )
    report_cmd.add_argument("--rank", type=int, default=1, help="Candidate rank for --kind profile")
    report_cmd.add_argument("--out", help="Write the report to this file instead of stdout")
    report_cmd.set_defaults(func=cmd_report)

    # Serve
    serve_cmd = subparsers.add_parser("serve", help="Run the web UI")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=5000)
    serve_cmd.add_argument("--debug", action="store_true")
    serve_cmd.set_defaults(func=cmd_serve)

    # Sessions
    sessions_parser = subparsers.add_parser("sessions", help="Session maintenance")
    sessions_sub = sessions_parser.add_subparsers(dest="subcommand", required=True)
    cleanup_cmd = sessions_sub.add_parser("cleanup", help="Remove old sessions")
    cleanup_cmd.add_argument("--days", type=int, help="Retention in days (default from config)")
    cleanup_cmd.set_defaults(func=cmd_sessions_cleanup)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    args.config_data = load_config(args.config)
    args.func(args)


if __name__ == "__main__":
    main(sys.argv[1:])
