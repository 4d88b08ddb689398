import pytest


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch):
    # Rich wraps output at the detected terminal width (80 under pytest);
    # long tmp_path names would otherwise split the asserted substrings.
    monkeypatch.setenv("COLUMNS", "250")
