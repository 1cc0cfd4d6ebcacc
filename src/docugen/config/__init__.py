"""Config module exports."""

from docugen.config.loader import load_config
from docugen.config.models import (
    DocuGenConfig,
    GenerationConfig,
    GitHubConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)

__all__ = [
    "load_config",
    "DocuGenConfig",
    "GenerationConfig",
    "GitHubConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
]
