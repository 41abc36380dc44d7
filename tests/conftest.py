from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def snapshot_path():
    return FIXTURES / "snapshot.json"


@pytest.fixture
def site_root():
    return FIXTURES / "site"
