import os
import sys
from pathlib import Path

import pytest

# Puts 'src' on sys.path before test collection so the top-level packages
# (profiling, agent, ingestion, dashboard_service, common) import without an
# editable install.

if sys.version_info < (3, 10):
    print(
        f"ERROR: This project requires Python 3.10+ (found {sys.version.split()[0]}).",
        file=sys.stderr,
    )
    sys.exit(1)


ROOT_DIR = Path(__file__).parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _isolate_profiling_env(monkeypatch):
    """Keep engine knobs and metrics export at their defaults unless a test opts in."""
    for name in list(os.environ):
        if name.startswith("PROFILING_") or name.startswith("OTEL_EXPORTER_OTLP"):
            monkeypatch.delenv(name, raising=False)
