import pytest

from lox.runner import Lox


@pytest.fixture
def run_lox(capsys):
    """Run source in a fresh session; returns (stdout, stderr, session)."""
    def run(source: str, lox: Lox = None):
        if lox is None:
            lox = Lox()
        lox.run(source)
        captured = capsys.readouterr()
        return captured.out, captured.err, lox
    return run
