"""Root test configuration: isolate every test from the caller's config and environment"""

import pytest

from mdvault.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test from an empty directory with no MDVAULT_* variables set."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)
