"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DOCUGEN__SECTION__KEY)
3. Legacy environment variables (GROQ_API_KEY, GITHUB_TOKEN, ...), incl. .env
4. Config YAML (--config path or ./docugen.yaml)
5. Global YAML (~/.config/docugen/config.yaml)
6. Built-in defaults (this file)

Environment Variable Format:
    DOCUGEN__<SECTION>__<KEY>=<VALUE>

Examples:
    DOCUGEN__LOGGING__LEVEL=DEBUG
    DOCUGEN__SERVER__PORT=8080
    DOCUGEN__GENERATION__MODEL=llama-3.1-70b-versatile
    DOCUGEN__GITHUB__PR_NUMBER=42
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from docugen.config.constants import (
    DEFAULT_GENERATION_MODEL,
    DEFAULT_GENERATION_URL,
    DEFAULT_GITHUB_API_URL,
    MAX_BODY_BYTES,
    PLACEHOLDER_KEY_PREFIX,
    PORT_MAX,
    PORT_MIN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DOCUGEN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs full prompts and API payload sizes.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """HTTP server configuration.

    Env vars:
        DOCUGEN__SERVER__HOST: Bind address (default: 127.0.0.1)
        DOCUGEN__SERVER__PORT: Port number (default: 3000)
        DOCUGEN__SERVER__STATIC_DIR: Directory served at / (default: bundled site)
    """

    host: str = Field(
        default="127.0.0.1",
        description="Bind address. Use 0.0.0.0 for network access.",
    )
    port: int = Field(
        default=3000,
        description="Server port.",
    )
    static_dir: str | None = Field(
        default=None,
        description="Directory with the landing page. None serves the bundled website.",
    )
    max_body_bytes: int = Field(
        default=MAX_BODY_BYTES,
        description="Largest accepted /api/analyze request body.",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (PORT_MIN <= v <= PORT_MAX):
            raise ValueError(f"Port must be {PORT_MIN}-{PORT_MAX}, got {v}")
        return v


class GenerationConfig(BaseModel):
    """Text-generation service configuration.

    Any OpenAI-compatible chat completions endpoint works; Groq is the default.

    Env vars:
        DOCUGEN__GENERATION__API_KEY: API key (legacy: GROQ_API_KEY)
        DOCUGEN__GENERATION__API_URL: Chat completions endpoint
        DOCUGEN__GENERATION__MODEL: Model name
        DOCUGEN__GENERATION__TIMEOUT_SEC: Per-request timeout
    """

    api_key: str | None = Field(
        default=None,
        description="API key. Without a usable key, docs fall back to a deterministic echo.",
    )
    api_url: str = Field(default=DEFAULT_GENERATION_URL)
    model: str = Field(default=DEFAULT_GENERATION_MODEL)
    max_tokens: int = Field(default=500, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout_sec: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout. The fallback is used once retries are exhausted.",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Retries on transport errors, 429 and 5xx responses.",
    )
    retry_base_delay_sec: float = Field(
        default=0.5,
        ge=0,
        description="Base delay between retries (exponential backoff).",
    )

    @property
    def has_usable_key(self) -> bool:
        """False for unset keys and template placeholders like 'your_key_here'."""
        if not self.api_key:
            return False
        return not self.api_key.lower().startswith(PLACEHOLDER_KEY_PREFIX)


class GitHubConfig(BaseModel):
    """Pull request comment configuration.

    Env vars:
        DOCUGEN__GITHUB__TOKEN: Token (legacy: GITHUB_TOKEN)
        DOCUGEN__GITHUB__REPO: "owner/repo" (legacy: GITHUB_REPO)
        DOCUGEN__GITHUB__PR_NUMBER: Pull request number (legacy: PR_NUMBER)
    """

    token: str | None = None
    repo: str | None = None
    pr_number: int | None = Field(default=None, gt=0)
    api_url: str = Field(default=DEFAULT_GITHUB_API_URL)
    timeout_sec: float = Field(default=15.0, gt=0)

    @field_validator("repo")
    @classmethod
    def validate_repo(cls, v: str | None) -> str | None:
        if v is None:
            return v
        owner, sep, name = v.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must be in 'owner/repo' format, got {v!r}")
        return f"{owner}/{name}"

    def missing_fields(self) -> list[str]:
        """Names of the settings still needed before a comment can be posted."""
        missing = []
        if not self.token:
            missing.append("token")
        if not self.repo:
            missing.append("repo")
        if self.pr_number is None:
            missing.append("pr_number")
        return missing


class DocuGenConfig(BaseModel):
    """Root configuration for DocuGen."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
