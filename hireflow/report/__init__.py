"""
Downloadable reports: plain-text summaries and profiles, CSV and JSON.
"""

from .export import (  # noqa: F401
    format_candidate_profile,
    format_detailed_report,
    format_top_summary,
    profile_filename,
    results_from_json,
    results_to_json,
    write_results_csv,
)
