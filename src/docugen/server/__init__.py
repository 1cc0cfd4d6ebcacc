"""DocuGen HTTP server - analysis API and landing page."""

from docugen.server.app import create_app
from docugen.server.lifecycle import run_server

__all__ = [
    "create_app",
    "run_server",
]
