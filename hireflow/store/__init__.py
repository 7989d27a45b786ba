"""
Session persistence: job description, uploaded résumés and screening
results stored as files in one directory per session.
"""

from .session import SessionNotFound, SessionStore, sanitize_file_name  # noqa: F401
