import json

from lox.__main__ import main
from lox.runner import Lox


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_script(tmp_path, capsys):
    script = write(tmp_path, 'ok.lox', 'print 1 + 1;')
    assert main([str(script)]) == 0
    assert capsys.readouterr().out == '2\n'


def test_syntax_error_status(tmp_path, capsys):
    script = write(tmp_path, 'bad.lox', 'print ;')
    assert main([str(script)]) == 65
    assert "Expect expression." in capsys.readouterr().err


def test_runtime_error_status(tmp_path, capsys):
    script = write(tmp_path, 'boom.lox', 'print undefined;')
    assert main([str(script)]) == 70
    assert "Undefined variable 'undefined'." in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.lox')]) == 66
    assert 'not found' in capsys.readouterr().err


def test_missing_ast_file(tmp_path, capsys):
    assert main(['--ast', str(tmp_path / 'missing.ast.json')]) == 66
    assert 'not found' in capsys.readouterr().err


def test_emit_and_run_ast(tmp_path, capsys):
    script = write(tmp_path, 'prog.lox', 'fun sq(x) { return x * x; }\nprint sq(7);')
    assert main(['--emit-ast', str(script)]) == 0
    ast_file = tmp_path / 'prog.lox.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_file)
    data = json.loads(ast_file.read_text(encoding='utf-8'))
    assert data['type'] == 'Program'

    assert main(['--ast', str(ast_file)]) == 0
    assert capsys.readouterr().out == '49\n'


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    script = write(tmp_path, 'dbg.lox', 'var a = 1;')
    assert main(['-vv', str(script)]) == 0
    assert 'declare a = 1' in (tmp_path / 'debug.txt').read_text()


class FakeSession:
    def __init__(self, lines):
        self.lines = list(lines)

    def prompt(self, message):
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if line is KeyboardInterrupt:
            raise KeyboardInterrupt
        return line


def test_repl_keeps_globals_and_recovers_from_errors(capsys):
    lox = Lox()
    lines = ['var a = 1;', 'print a + 1;', 'print b;', KeyboardInterrupt, 'print (;', '', 'print a;']
    lox.run_prompt(FakeSession(lines))
    captured = capsys.readouterr()
    assert captured.out.split('\n') == ['lox REPL', '2', '1', 'Bye!', '']
    assert "Undefined variable 'b'." in captured.err
    assert 'Expect expression.' in captured.err
    # flags are cleared before every line
    assert not lox.had_error
    assert not lox.had_runtime_error
