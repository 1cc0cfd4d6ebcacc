"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
isolates every test from the developer's environment and global config.
"""

import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from docugen.config import loader  # noqa: E402
from docugen.core.logging import clear_request_id  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Hide env vars, .env, ./docugen.yaml and the global config from tests."""
    for var in list(os.environ):
        if var.upper().startswith("DOCUGEN__") or var in loader.LEGACY_ENV_VARS:
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield
    clear_request_id()
    # CLI tests configure logging onto streams that are closed afterwards
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the old.js / new.js sample pair."""
    return FIXTURES_DIR
