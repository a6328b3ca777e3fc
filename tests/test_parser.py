import pytest

from monkeylang.lexer import Lexer
from monkeylang.nodes import (
    ArrayLiteral,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    ReturnStatement,
    StringLiteral,
)
from monkeylang.parser import ParseError, Parser, Precedence, parse


def _single_expression(source):
    program = parse(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def _check_integer(exp, value):
    assert isinstance(exp, IntegerLiteral)
    assert exp.value == value
    assert exp.token_literal() == str(value)


def _check_identifier(exp, value):
    assert isinstance(exp, Identifier)
    assert exp.value == value
    assert exp.token_literal() == value


def _check_boolean(exp, value):
    assert isinstance(exp, Boolean)
    assert exp.value is value
    assert exp.token_literal() == ("true" if value else "false")


def _check_literal(exp, expected):
    if isinstance(expected, bool):
        _check_boolean(exp, expected)
    elif isinstance(expected, int):
        _check_integer(exp, expected)
    else:
        _check_identifier(exp, expected)


def _check_infix(exp, left, operator, right):
    assert isinstance(exp, InfixExpression)
    _check_literal(exp.left, left)
    assert exp.operator == operator
    _check_literal(exp.right, right)


@pytest.mark.parametrize(
    "source, name, value",
    [("let x = 5;", "x", 5), ("let y = true;", "y", True), ("let foobar = y;", "foobar", "y")],
)
def test_let_statements(source, name, value):
    program = parse(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert stmt.token_literal() == "let"
    assert isinstance(stmt, LetStatement)
    assert stmt.name.value == name
    assert stmt.name.token_literal() == name
    _check_literal(stmt.value, value)


@pytest.mark.parametrize(
    "source, value",
    [("return 5;", 5), ("return true;", True), ("return foobar;", "foobar")],
)
def test_return_statements(source, value):
    program = parse(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ReturnStatement)
    assert stmt.token_literal() == "return"
    _check_literal(stmt.return_value, value)


def test_identifier_expression():
    _check_identifier(_single_expression("foobar;"), "foobar")


def test_integer_literal_expression():
    _check_integer(_single_expression("5;"), 5)


@pytest.mark.parametrize(
    "source, operator, value",
    [
        ("!5;", "!", 5),
        ("-15;", "-", 15),
        ("!foobar;", "!", "foobar"),
        ("-foobar;", "-", "foobar"),
        ("!true;", "!", True),
        ("!false;", "!", False),
    ],
)
def test_parsing_prefix_expressions(source, operator, value):
    exp = _single_expression(source)
    assert isinstance(exp, PrefixExpression)
    assert exp.operator == operator
    _check_literal(exp.right, value)


@pytest.mark.parametrize(
    "source, left, operator, right",
    [
        ("5 + 5;", 5, "+", 5),
        ("5 - 5;", 5, "-", 5),
        ("5 * 5;", 5, "*", 5),
        ("5 / 5;", 5, "/", 5),
        ("5 > 5;", 5, ">", 5),
        ("5 < 5;", 5, "<", 5),
        ("5 == 5;", 5, "==", 5),
        ("5 != 5;", 5, "!=", 5),
        ("foobar + barfoo;", "foobar", "+", "barfoo"),
        ("foobar - barfoo;", "foobar", "-", "barfoo"),
        ("foobar * barfoo;", "foobar", "*", "barfoo"),
        ("foobar / barfoo;", "foobar", "/", "barfoo"),
        ("foobar > barfoo;", "foobar", ">", "barfoo"),
        ("foobar < barfoo;", "foobar", "<", "barfoo"),
        ("foobar == barfoo;", "foobar", "==", "barfoo"),
        ("foobar != barfoo;", "foobar", "!=", "barfoo"),
        ("true == true", True, "==", True),
        ("true != false", True, "!=", False),
        ("false == false", False, "==", False),
    ],
)
def test_parsing_infix_expressions(source, left, operator, right):
    _check_infix(_single_expression(source), left, operator, right)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4)((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true", "true"),
        ("false", "false"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("3 < 5 == true", "((3 < 5) == true)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("2 / (5 + 5)", "(2 / (5 + 5))"),
        ("(5 + 5) * 2 * (5 + 5)", "(((5 + 5) * 2) * (5 + 5))"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        (
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
            "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        ),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
        ("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
        (
            "add(a * b[2], b[1], 2 * [1, 2][1])",
            "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
        ),
    ],
)
def test_operator_precedence_parsing(source, expected):
    assert str(parse(source)) == expected


@pytest.mark.parametrize("source, expected", [("true;", True), ("false;", False)])
def test_boolean_expression(source, expected):
    _check_boolean(_single_expression(source), expected)


def test_if_expression():
    exp = _single_expression("if (x < y) { x }")
    assert isinstance(exp, IfExpression)
    _check_infix(exp.condition, "x", "<", "y")
    assert len(exp.consequence.statements) == 1
    consequence = exp.consequence.statements[0]
    assert isinstance(consequence, ExpressionStatement)
    _check_identifier(consequence.expression, "x")
    assert exp.alternative is None


def test_if_else_expression():
    exp = _single_expression("if (x < y) { x } else { y }")
    assert isinstance(exp, IfExpression)
    _check_infix(exp.condition, "x", "<", "y")
    assert len(exp.consequence.statements) == 1
    _check_identifier(exp.consequence.statements[0].expression, "x")
    assert len(exp.alternative.statements) == 1
    alternative = exp.alternative.statements[0]
    assert isinstance(alternative, ExpressionStatement)
    _check_identifier(alternative.expression, "y")


def test_function_literal_parsing():
    function = _single_expression("fn(x, y) { x + y; }")
    assert isinstance(function, FunctionLiteral)
    assert len(function.parameters) == 2
    _check_literal(function.parameters[0], "x")
    _check_literal(function.parameters[1], "y")
    assert len(function.body.statements) == 1
    body_stmt = function.body.statements[0]
    assert isinstance(body_stmt, ExpressionStatement)
    _check_infix(body_stmt.expression, "x", "+", "y")


@pytest.mark.parametrize(
    "source, params",
    [("fn() {};", []), ("fn(x) {};", ["x"]), ("fn(x, y, z) {};", ["x", "y", "z"])],
)
def test_function_parameter_parsing(source, params):
    program = parse(source)
    function = program.statements[0].expression
    assert isinstance(function, FunctionLiteral)
    assert [p.value for p in function.parameters] == params
    for param, name in zip(function.parameters, params):
        _check_identifier(param, name)


def test_call_expression_parsing():
    exp = _single_expression("add(1, 2 * 3, 4 + 5);")
    assert isinstance(exp, CallExpression)
    _check_identifier(exp.function, "add")
    assert len(exp.arguments) == 3
    _check_literal(exp.arguments[0], 1)
    _check_infix(exp.arguments[1], 2, "*", 3)
    _check_infix(exp.arguments[2], 4, "+", 5)


@pytest.mark.parametrize(
    "source, ident, args",
    [
        ("add();", "add", []),
        ("add(1);", "add", ["1"]),
        ("add(1, 2 * 3, 4 + 5);", "add", ["1", "(2 * 3)", "(4 + 5)"]),
    ],
)
def test_call_expression_parameter_parsing(source, ident, args):
    exp = parse(source).statements[0].expression
    assert isinstance(exp, CallExpression)
    _check_identifier(exp.function, ident)
    assert [str(a) for a in exp.arguments] == args


def test_string_literal_expression():
    literal = parse('"hello world";').statements[0].expression
    assert isinstance(literal, StringLiteral)
    assert literal.value == "hello world"


def test_parsing_empty_array_literals():
    array = parse("[]").statements[0].expression
    assert isinstance(array, ArrayLiteral)
    assert array.elements == []


def test_parsing_array_literals():
    array = parse("[1, 2 * 2, 3 + 3]").statements[0].expression
    assert isinstance(array, ArrayLiteral)
    assert len(array.elements) == 3
    _check_integer(array.elements[0], 1)
    _check_infix(array.elements[1], 2, "*", 2)
    _check_infix(array.elements[2], 3, "+", 3)


def test_parsing_index_expressions():
    index_exp = parse("myArray[1 + 1]").statements[0].expression
    assert isinstance(index_exp, IndexExpression)
    _check_identifier(index_exp.left, "myArray")
    _check_infix(index_exp.index, 1, "+", 1)


def test_parsing_empty_hash_literal():
    hash_lit = parse("{}").statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    assert hash_lit.pairs == []


def test_parsing_hash_literals_string_keys():
    hash_lit = parse('{"one": 1, "two": 2, "three": 3}').statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    expected = {"one": 1, "two": 2, "three": 3}
    assert len(hash_lit.pairs) == len(expected)
    for key, value in hash_lit.pairs:
        assert isinstance(key, StringLiteral)
        _check_integer(value, expected[str(key)])


def test_parsing_hash_literals_boolean_keys():
    hash_lit = parse("{true: 1, false: 2}").statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    expected = {"true": 1, "false": 2}
    assert len(hash_lit.pairs) == len(expected)
    for key, value in hash_lit.pairs:
        assert isinstance(key, Boolean)
        _check_integer(value, expected[str(key)])


def test_parsing_hash_literals_integer_keys():
    hash_lit = parse("{1: 1, 2: 2, 3: 3}").statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    expected = {"1": 1, "2": 2, "3": 3}
    assert len(hash_lit.pairs) == len(expected)
    for key, value in hash_lit.pairs:
        assert isinstance(key, IntegerLiteral)
        _check_integer(value, expected[str(key)])


def test_parsing_hash_literals_with_expressions():
    source = '{"one": 0 + 1, "two": 10 - 8, "three": 15 / 5}'
    hash_lit = parse(source).statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    assert len(hash_lit.pairs) == 3
    checks = {
        "one": (0, "+", 1),
        "two": (10, "-", 8),
        "three": (15, "/", 5),
    }
    for key, value in hash_lit.pairs:
        assert isinstance(key, StringLiteral)
        _check_infix(value, *checks[str(key)])


def test_parser_class_collects_errors():
    parser = Parser(Lexer("let = 5;"))
    program = parser.parse_program()
    assert parser.errors == [
        "expected next token to be IDENT, got = instead",
        "no prefix parse function for = found",
    ]
    assert len(program.statements) == 2


def test_parse_raises_with_all_errors():
    with pytest.raises(ParseError) as info:
        parse("let = 5;")
    assert info.value.errors[0] == "expected next token to be IDENT, got = instead"
    assert len(info.value.errors) == 2


def test_integer_out_of_range_is_an_error():
    with pytest.raises(ParseError) as info:
        parse("99999999999999999999")
    assert info.value.errors == ['could not parse "99999999999999999999" as integer']


def test_leading_zero_reads_as_octal():
    literal = parse("010").statements[0].expression
    assert isinstance(literal, IntegerLiteral)
    assert literal.value == 8


@pytest.mark.parametrize(
    "source, expected",
    [
        ("a == b < c", "(a == (b < c))"),
        ("a < b + c", "(a < (b + c))"),
        ("a + b * c", "(a + (b * c))"),
        ("-a * b", "((-a) * b)"),
        ("-f(a)", "(-f(a))"),
        ("f(a)[0]", "(f(a)[0])"),
    ],
)
def test_precedence_ordering(source, expected):
    assert Precedence.LOWEST < Precedence.EQUALS < Precedence.LESSGREATER
    assert Precedence.SUM < Precedence.PRODUCT < Precedence.PREFIX
    assert Precedence.PREFIX < Precedence.CALL < Precedence.INDEX
    assert str(parse(source)) == expected