from __future__ import annotations

from pathlib import Path

import pytest

from ._helpers import FakeClient


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def environ(tmp_path: Path) -> dict[str, str]:
    """Environment with every config location pointing into ``tmp_path``."""
    return {
        'HOME': str(tmp_path / 'home'),
        'XDG_CONFIG_HOME': str(tmp_path / 'xdg-home'),
        'XDG_CONFIG_DIRS': f"{tmp_path / 'xdg-a'}:{tmp_path / 'xdg-b'}",
    }
