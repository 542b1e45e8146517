from pathlib import Path

from lox.runner import Lox

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_for_loops(capsys):
    lox = Lox()
    status = lox.run_file(str(EXAMPLES / 'program_10.lox'))
    captured = capsys.readouterr()
    assert status == 0
    assert captured.out.split() == ['8', '1', '2', '3', '2', '4', '6', '3', '6', '9']
