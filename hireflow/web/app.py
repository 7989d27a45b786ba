"""
Flask UI for HireFlow.

The browser flow has three pages: the upload form (job description plus
résumés), a processing page that shows the agent sequence and starts
the screening, and the results page with the ranked candidates, the
selected candidate's score breakdown and per-agent feedback, and
download links.  All state lives in the on-disk session store; the URL
carries the session id.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from flask import Flask, Response, flash, redirect, render_template, request, send_file, url_for

from ..config import load_config
from ..jobs.schema import EXPERIENCE_LEVELS, InvalidJobDescription, job_from_dict
from ..llm.providers import LLMProvider, get_default_provider
from ..pipeline.screening import screen_candidates
from ..report.export import (
    DETAILED_FILENAME,
    format_candidate_profile,
    format_detailed_report,
    format_top_summary,
    profile_filename,
    results_to_json,
    summary_filename,
    write_results_csv,
)
from ..store.session import SessionNotFound, SessionStore

logger = logging.getLogger(__name__)

AGENT_SEQUENCE = [
    ("HR Agent", "Contact details, location and languages"),
    ("Technical Evaluator", "Required and preferred skill coverage"),
    ("Experience Analyzer", "Years of experience and career history"),
    ("Cultural Fit Assessor", "Soft skills and company culture"),
    ("Final Reviewer", "Synthesis and hiring recommendation"),
]

DOWNLOAD_KINDS = ("summary", "detailed", "csv", "json")


def _attachment(content: str, filename: str, mimetype: str = "text/plain") -> Response:
    return Response(
        content,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def create_app(
    config: Optional[Dict[str, Dict[str, object]]] = None,
    provider: Optional[LLMProvider] = None,
) -> Flask:
    """Create the Flask application.

    Args:
        config: Configuration as returned by `load_config`; loaded from
            the environment when omitted.
        provider: LLM provider shared by all requests; resolved from the
            configuration when omitted.
    """
    config = config or load_config()
    web = config["web"]
    app = Flask(__name__)
    app.secret_key = web.get("secret_key") or os.urandom(24)
    app.config["MAX_CONTENT_LENGTH"] = int(web.get("max_upload_mb") or 16) * 1024 * 1024
    allowed = {ext.lower().lstrip(".") for ext in web.get("allowed_extensions") or []}
    store = SessionStore(str(config["sessions"]["base_dir"]))
    provider = provider or get_default_provider(config)
    screening = config["screening"]

    @app.errorhandler(SessionNotFound)
    def session_not_found(exc):
        flash("Error: That screening session does not exist.")
        return redirect(url_for("home"))

    @app.route("/")
    def home():
        """Displays the form for the job description and résumé uploads."""
        return render_template(
            "index.html",
            experience_levels=list(EXPERIENCE_LEVELS),
            default_top_n=screening.get("top_n", 3),
            allowed_extensions=sorted(allowed),
        )

    @app.route("/sessions", methods=["POST"])
    def create_session():
        """Validates the form, stores job and résumés, then shows processing."""
        job = job_from_dict(request.form.to_dict())
        missing = job.missing_fields()
        if missing:
            flash("Error: Missing required fields: " + ", ".join(missing))
            return redirect(url_for("home"))

        files = [f for f in request.files.getlist("resumes") if f and f.filename]
        if not files:
            flash("Error: Please upload at least one résumé.")
            return redirect(url_for("home"))
        rejected = [
            f.filename for f in files if os.path.splitext(f.filename)[1].lower().lstrip(".") not in allowed
        ]
        if rejected:
            flash("Error: Unsupported file type: " + ", ".join(rejected))
            return redirect(url_for("home"))

        session_id = store.create_session()
        store.save_job(session_id, job)
        for upload in files:
            store.save_resume(session_id, upload.filename, upload.read())
        logger.info("Session %s created with %d résumés", session_id, len(files))
        return redirect(url_for("processing", session_id=session_id))

    @app.route("/sessions/<session_id>/processing")
    def processing(session_id):
        """Shows the agent sequence before screening starts."""
        job = store.load_job(session_id)
        if job is None:
            flash("Error: No job description stored for this session.")
            return redirect(url_for("home"))
        return render_template(
            "processing.html",
            session_id=session_id,
            job=job,
            resumes=store.list_resumes(session_id),
            agents=AGENT_SEQUENCE,
        )

    @app.route("/sessions/<session_id>/process", methods=["POST"])
    def process(session_id):
        """Runs the screening for every stored résumé and saves the results."""
        job = store.load_job(session_id)
        uploads = store.list_resumes(session_id)
        if job is None or not uploads:
            flash("Error: Upload a job description and résumés first.")
            return redirect(url_for("home"))
        try:
            analyses = screen_candidates(
                uploads,
                job,
                provider=provider,
                use_llm_parsing=bool(screening.get("use_llm_parsing", True)),
            )
        except InvalidJobDescription as exc:
            flash(f"Error: {exc}")
            return redirect(url_for("home"))
        store.save_results(session_id, analyses)
        flash(f"Screened {len(uploads)} résumés.")
        return redirect(url_for("results", session_id=session_id))

    @app.route("/sessions/<session_id>/results")
    def results(session_id):
        """Displays the ranked candidates and the selected candidate's details."""
        analyses = store.load_results(session_id)
        if not analyses:
            flash("Error: No results found for this session. Please run the screening first.")
            return redirect(url_for("home"))
        selected = request.args.get("candidate", default=0, type=int)
        selected = min(max(selected, 0), len(analyses) - 1)
        return render_template(
            "results.html",
            session_id=session_id,
            job=store.load_job(session_id),
            analyses=analyses,
            selected=selected,
            current=analyses[selected],
        )

    @app.route("/sessions/<session_id>/download/<kind>")
    def download(session_id, kind):
        analyses = store.load_results(session_id)
        if not analyses or kind not in DOWNLOAD_KINDS:
            flash("Error: Nothing to download.")
            return redirect(url_for("home"))
        if kind == "summary":
            return _attachment(format_top_summary(analyses), summary_filename(analyses))
        if kind == "detailed":
            return _attachment(format_detailed_report(analyses), DETAILED_FILENAME)
        if kind == "json":
            return _attachment(results_to_json(analyses), "results.json", "application/json")
        csv_path = os.path.join(store.session_path(session_id), "results.csv")
        write_results_csv(analyses, csv_path)
        return send_file(csv_path, as_attachment=True, download_name="candidates.csv", mimetype="text/csv")

    @app.route("/sessions/<session_id>/download/profile/<int:rank>")
    def download_profile(session_id, rank):
        analyses = store.load_results(session_id) or []
        for analysis in analyses:
            if analysis.rank == rank:
                return _attachment(
                    format_candidate_profile(analysis), profile_filename(analysis.candidate.name)
                )
        flash(f"Error: No candidate with rank {rank}.")
        return redirect(url_for("home"))

    return app
