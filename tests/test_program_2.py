from pathlib import Path

from lox.runner import Lox

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_fibonacci(capsys):
    lox = Lox()
    status = lox.run_file(str(EXAMPLES / 'program_2.lox'))
    captured = capsys.readouterr()
    assert status == 0
    assert captured.out.split() == ['0', '1', '1', '2', '3', '5', '8', '13', '21', '34']
