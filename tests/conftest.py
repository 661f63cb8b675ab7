import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clear_size_override(monkeypatch):
    monkeypatch.delenv("MD_SENTENCE_FORMAT_MAX_FILE_SIZE", raising=False)
