import pytest

from lox.ast import Assign, Block, Expression, Function, Literal, Print, Var, Variable, While
from lox.ast_printer import AstPrinter
from lox.errors import ErrorReporter
from lox.parser import parse
from lox.scanner import scan


def parse_source(source):
    reporter = ErrorReporter()
    statements = parse(scan(source, reporter), reporter)
    return statements, reporter


def print_expr(source):
    statements, reporter = parse_source(source)
    assert not reporter.had_error
    assert len(statements) == 1
    return AstPrinter().print(statements[0].expression)


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3;', '(+ 1 (* 2 3))'),
    ('1 - 2 - 3;', '(- (- 1 2) 3)'),
    ('-a - -b;', '(- (- a) (- b))'),
    ('a = b = c;', '(= a (= b c))'),
    ('a or b and c;', '(or a (and b c))'),
    ('!!true == false;', '(== (! (! true)) false)'),
    ('f(1)(2, 3);', '(call (call f 1) 2 3)'),
    ('(1 + 2) * 3 < 4 != true;', '(!= (< (* (group (+ 1 2)) 3) 4) true)'),
    ('a >= b == c <= d;', '(== (>= a b) (<= c d))'),
    ('x = y or z;', '(= x (or y z))'),
])
def test_precedence_and_associativity(source, expected):
    assert print_expr(source) == expected


def test_for_loop_desugars_to_while():
    statements, reporter = parse_source('for (var i = 0; i < 3; i = i + 1) print i;')
    assert not reporter.had_error
    [outer] = statements
    assert isinstance(outer, Block)
    init, loop = outer.statements
    assert isinstance(init, Var)
    assert init.name.lexeme == 'i'
    assert isinstance(loop, While)
    assert AstPrinter().print(loop.condition) == '(< i 3)'
    body, increment = loop.body.statements
    assert isinstance(body, Print)
    assert isinstance(increment, Expression)
    assert isinstance(increment.expression, Assign)


def test_for_loop_without_clauses_loops_forever():
    statements, reporter = parse_source('for (;;) print 1;')
    assert not reporter.had_error
    [loop] = statements
    assert isinstance(loop, While)
    assert loop.condition == Literal(True)
    assert isinstance(loop.body, Print)


def test_inline_declaration_is_a_var():
    statements, _ = parse_source('x := 1; x = 2; x;')
    declare, assign, read = statements
    assert isinstance(declare, Var)
    assert declare.name.lexeme == 'x'
    assert declare.initializer == Literal(1.0)
    assert isinstance(assign.expression, Assign)
    assert isinstance(read.expression, Variable)


def test_function_declaration():
    statements, reporter = parse_source('fun add(a, b) { return a + b; }')
    assert not reporter.had_error
    [fn] = statements
    assert isinstance(fn, Function)
    assert [p.lexeme for p in fn.params] == ['a', 'b']
    assert len(fn.body) == 1


def test_invalid_assignment_target_is_reported_but_parsing_continues():
    statements, reporter = parse_source('1 = 2; print 3;')
    assert reporter.messages == ["[line 1] Error at '=': Invalid assignment target."]
    assert len(statements) == 2
    assert statements[0].expression == Literal(1.0)


def test_too_many_parameters_and_arguments():
    names = ', '.join(f'p{i}' for i in range(256))
    statements, reporter = parse_source(f'fun f({names}) {{}} f({names});')
    assert reporter.messages == [
        "[line 1] Error at 'p255': Can't have more than 255 parameters.",
        "[line 1] Error at 'p255': Can't have more than 255 arguments.",
    ]
    # the limit is a diagnostic, the declaration is still built
    assert len(statements[0].params) == 256
    assert len(statements[1].expression.arguments) == 256


def test_return_outside_function():
    _, reporter = parse_source('return 1;')
    assert reporter.messages == ["[line 1] Error at 'return': Can't return from top-level code."]


def test_recovery_reports_one_error_per_statement():
    statements, reporter = parse_source('print 1 print 2;\nvar = 3;\nprint 4;')
    assert reporter.messages == [
        "[line 1] Error at 'print': Expect ';' after value.",
        "[line 2] Error at '=': Expect variable name.",
    ]
    assert len(statements) == 1
    assert statements[0].expression == Literal(4.0)


def test_unclosed_block_reports_at_end():
    _, reporter = parse_source('{ print 1;')
    assert reporter.messages == ["[line 1] Error at end: Expect '}' after block."]


def test_class_is_reserved():
    statements, reporter = parse_source('class Foo {}')
    assert reporter.messages == ["[line 1] Error at 'class': Expect expression."]
    assert statements == []


def test_error_inside_function_body_keeps_later_declarations():
    statements, reporter = parse_source('fun f() { var; }\nprint 1;')
    assert reporter.had_error
    assert isinstance(statements[-1], Print)
