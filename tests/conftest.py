import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'livery' and tests/ importable for helpers.
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers.cache_utils import reset_livery_caches  # noqa: E402
from helpers.tree import write_files  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_livery_state(monkeypatch: pytest.MonkeyPatch):
    """Fresh caches and no developer LIVERY_* overrides for every test."""
    for key in list(os.environ):
        if key.startswith("LIVERY_"):
            monkeypatch.delenv(key, raising=False)
    reset_livery_caches()
    yield
    reset_livery_caches()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A small multi-brand site: one overlaid component, one overlaid stylesheet."""
    write_files(
        tmp_path,
        {
            "package.json": "{}\n",
            "src/entry-client.tsx": "import './App'\n",
            "src/entry-server.tsx": "export {}\n",
            "src/App.tsx": "import Button from './components/Button'\n",
            "src/components/Button.tsx": "export default 'base'\n",
            "src/components/Card.tsx": "export default 'card'\n",
            "src/components/Card.module.css": ".card { color: black }\n",
            "src/components/Title.module.css": ".title { color: black }\n",
            "src/components/brands/acme/Button.tsx": "export default 'acme'\n",
            "src/components/brands/acme/Title.module.css": ".title { color: red }\n",
            "src/styles/theme.css": "body { margin: 0 }\n",
            "src/styles/brands/globex/theme.css": "body { background: green }\n",
        },
    )
    return tmp_path


@pytest.fixture
def project_env(site: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """``site`` as the auto-detected project root and working directory."""
    monkeypatch.setenv("LIVERY_PROJECT_ROOT", str(site))
    monkeypatch.chdir(site)
    return site
