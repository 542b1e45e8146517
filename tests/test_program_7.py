from pathlib import Path

from lox.runner import Lox

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_runtime_error_halts(capsys):
    lox = Lox()
    status = lox.run_file(str(EXAMPLES / 'program_7.lox'))
    captured = capsys.readouterr()
    # statements before the error keep their effect, the rest never run
    assert status == 70
    assert captured.out.strip() == 'before'
    assert "[line 2] Error at '+': Operands must be two numbers or two strings." in captured.err
