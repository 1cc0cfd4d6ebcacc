"""Configuration constants.

Values here are not user-configurable. For configurable values, see models.py.
"""

# =============================================================================
# External Services
# =============================================================================

DEFAULT_GENERATION_URL = "https://api.groq.com/openai/v1/chat/completions"
"""OpenAI-compatible chat completions endpoint used when none is configured."""

DEFAULT_GENERATION_MODEL = "llama-3.1-8b-instant"

DEFAULT_GITHUB_API_URL = "https://api.github.com"

GITHUB_USER_AGENT = "DocuGen-AI-Bot"

PLACEHOLDER_KEY_PREFIX = "your"
"""Keys starting with this (e.g. 'your_groq_api_key') are template leftovers."""

# =============================================================================
# HTTP
# =============================================================================

MAX_BODY_BYTES = 1024 * 1024
"""Default /api/analyze request body limit."""

REQUEST_ID_HEADER = "X-Request-Id"

PORT_MIN = 0
PORT_MAX = 65535
"""Valid port range."""

# =============================================================================
# Config Files
# =============================================================================

CONFIG_FILENAME = "docugen.yaml"
"""Config file looked up in the working directory when --config is not given."""

ENV_PREFIX = "DOCUGEN__"
