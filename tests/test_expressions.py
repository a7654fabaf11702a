import pytest

from modelhttp.expressions import (
    Assignment,
    BinaryOp,
    BooleanLiteral,
    EnvironmentVariable,
    Identifier,
    IntegerLiteral,
    RealLiteral,
    StringLiteral,
    UnaryOp,
)
from modelhttp.lexer import TokenType
from modelhttp.scope import Scope
from modelhttp.value import INT_MAX, INT_MIN, LangError, Type, Value


@pytest.fixture
def scope():
    s = Scope()
    s.declare("x", Type.INT, Value(7))
    s.declare("name", Type.STRING, Value("abc"))
    return s


def binary(op, left, right, scope=None):
    return BinaryOp(op, left, right).evaluate(scope or Scope())


def test_identifier_reads_variable(scope):
    assert Identifier("x").evaluate(scope) == Value(7)
    assert str(Identifier("x")) == "x"


def test_identifier_undefined_raises(scope):
    with pytest.raises(LangError, match="Undefined variable 'missing'"):
        Identifier("missing").evaluate(scope)


def test_environment_variable(monkeypatch, scope):
    monkeypatch.setenv("MODELHTTP_TEST_VAR", "hello")
    assert EnvironmentVariable("MODELHTTP_TEST_VAR").evaluate(scope) == Value("hello")
    assert str(EnvironmentVariable("MODELHTTP_TEST_VAR")) == "$MODELHTTP_TEST_VAR"


def test_unset_environment_variable_is_empty_string(monkeypatch, scope):
    monkeypatch.delenv("MODELHTTP_UNSET_VAR", raising=False)
    assert EnvironmentVariable("MODELHTTP_UNSET_VAR").evaluate(scope) == Value("")


def test_literals_evaluate_to_their_values(scope):
    assert IntegerLiteral(42).evaluate(scope) == Value(42)
    assert RealLiteral(2.5).evaluate(scope) == Value(2.5)
    assert StringLiteral("hi").evaluate(scope) == Value("hi")
    assert BooleanLiteral(True).evaluate(scope) == Value(True)


def test_literal_text():
    assert str(IntegerLiteral(42)) == "42"
    assert str(RealLiteral(1.5)) == "1.500000"
    assert str(StringLiteral("hi")) == '"hi"'
    assert str(BooleanLiteral(False)) == "false"
    assert str(BooleanLiteral(True)) == "true"


@pytest.mark.parametrize("a,b", [(3, 4), (-10, 25), (0, 9)])
def test_integer_addition_invariants(a, b):
    total = binary(TokenType.PLUS, IntegerLiteral(a), IntegerLiteral(b))
    swapped = binary(TokenType.PLUS, IntegerLiteral(b), IntegerLiteral(a))
    assert total == swapped
    assert total.type is Type.INT
    back = binary(TokenType.MINUS, IntegerLiteral(total.as_int()), IntegerLiteral(b))
    assert back == Value(a)


def test_integer_multiplication_commutes():
    left = binary(TokenType.MULTIPLY, IntegerLiteral(6), IntegerLiteral(-9))
    right = binary(TokenType.MULTIPLY, IntegerLiteral(-9), IntegerLiteral(6))
    assert left == right
    assert left.type is Type.INT


@pytest.mark.parametrize(
    "left,right",
    [(IntegerLiteral(1), RealLiteral(0.5)), (RealLiteral(0.5), IntegerLiteral(1))],
)
def test_mixed_arithmetic_gives_real(left, right):
    assert binary(TokenType.PLUS, left, right).type is Type.REAL
    assert binary(TokenType.MULTIPLY, left, right).type is Type.REAL


def test_string_concatenation():
    result = binary(TokenType.PLUS, StringLiteral("ab"), StringLiteral("cd"))
    assert result == Value("ab" + "cd")


def test_integer_overflow_wraps():
    result = binary(TokenType.PLUS, IntegerLiteral(INT_MAX), IntegerLiteral(1))
    assert result == Value(INT_MIN)


@pytest.mark.parametrize(
    "op,left,right",
    [
        (TokenType.PLUS, BooleanLiteral(True), BooleanLiteral(False)),
        (TokenType.MINUS, StringLiteral("a"), StringLiteral("b")),
        (TokenType.PLUS, StringLiteral("a"), IntegerLiteral(1)),
        (TokenType.MODULO, RealLiteral(1.0), IntegerLiteral(1)),
        (TokenType.LESS, BooleanLiteral(True), BooleanLiteral(False)),
        (TokenType.AND, IntegerLiteral(1), IntegerLiteral(1)),
        (TokenType.EQUAL, StringLiteral("1"), IntegerLiteral(1)),
    ],
)
def test_unsupported_binary_operations(op, left, right):
    with pytest.raises(LangError, match="Unsupported binary operation between types"):
        binary(op, left, right)


def test_division_by_integer_zero():
    with pytest.raises(LangError, match="Division by zero"):
        binary(TokenType.DIVIDE, IntegerLiteral(5), IntegerLiteral(0))


@pytest.mark.parametrize("divisor", [IntegerLiteral(2), RealLiteral(2.0)])
def test_division_divisor_check_rejects_nonzero(divisor):
    with pytest.raises(LangError):
        binary(TokenType.DIVIDE, IntegerLiteral(8), divisor)


def test_modulo_by_zero():
    with pytest.raises(LangError, match="Modulo by zero"):
        binary(TokenType.MODULO, IntegerLiteral(5), IntegerLiteral(0))


@pytest.mark.parametrize("a,b", [(-7, 2), (7, -2), (17, 5), (-17, -5)])
def test_modulo_follows_dividend_sign(a, b):
    remainder = binary(TokenType.MODULO, IntegerLiteral(a), IntegerLiteral(b)).as_int()
    assert abs(remainder) < abs(b)
    assert remainder == 0 or (remainder < 0) == (a < 0)
    assert (a - remainder) % b == 0


@pytest.mark.parametrize(
    "op,expected",
    [
        (TokenType.LESS, True),
        (TokenType.GREATER, False),
        (TokenType.LESSEQUAL, True),
        (TokenType.GREATEREQUAL, False),
        (TokenType.EQUAL, False),
        (TokenType.NOTEQUAL, True),
    ],
)
def test_comparisons_of_ordered_operands(op, expected):
    for left, right in [
        (IntegerLiteral(1), IntegerLiteral(2)),
        (IntegerLiteral(1), RealLiteral(1.5)),
        (RealLiteral(0.5), IntegerLiteral(1)),
        (StringLiteral("apple"), StringLiteral("banana")),
    ]:
        assert binary(op, left, right) == Value(expected)


def test_int_equals_real():
    assert binary(TokenType.EQUAL, IntegerLiteral(2), RealLiteral(2.0)) == Value(True)


def test_boolean_equality():
    assert binary(TokenType.EQUAL, BooleanLiteral(True), BooleanLiteral(True)) == Value(True)
    assert binary(TokenType.NOTEQUAL, BooleanLiteral(True), BooleanLiteral(False)) == Value(True)


@pytest.mark.parametrize("a", [True, False])
@pytest.mark.parametrize("b", [True, False])
def test_logical_operators(a, b):
    assert binary(TokenType.AND, BooleanLiteral(a), BooleanLiteral(b)) == Value(a and b)
    assert binary(TokenType.OR, BooleanLiteral(a), BooleanLiteral(b)) == Value(a or b)


def test_both_operands_are_evaluated(scope):
    expr = BinaryOp(TokenType.AND, BooleanLiteral(False), Identifier("missing"))
    with pytest.raises(LangError, match="Undefined variable"):
        expr.evaluate(scope)


def test_binary_text():
    expr = BinaryOp(TokenType.PLUS, Identifier("x"), IntegerLiteral(1))
    assert str(expr) == "(x + 1)"
    assert str(BinaryOp(TokenType.AND, Identifier("a"), Identifier("b"))) == "(a and b)"


def test_unknown_binary_operator(scope):
    expr = BinaryOp(TokenType.COMMA, Identifier("x"), Identifier("x"))
    assert str(expr) == "(x ?? x)"
    with pytest.raises(LangError, match="Unsupported binary operation"):
        expr.evaluate(scope)


@pytest.mark.parametrize("literal", [IntegerLiteral(5), RealLiteral(2.25), IntegerLiteral(0)])
def test_double_negation_round_trip(literal, scope):
    once = UnaryOp(TokenType.MINUS, literal)
    twice = UnaryOp(TokenType.MINUS, once)
    assert twice.evaluate(scope) == literal.evaluate(scope)
    assert once.evaluate(scope).type is literal.evaluate(scope).type


def test_not_inverts_boolean(scope):
    assert UnaryOp(TokenType.NOT, BooleanLiteral(True)).evaluate(scope) == Value(False)
    assert UnaryOp(TokenType.NOT, BooleanLiteral(False)).evaluate(scope) == Value(True)


@pytest.mark.parametrize(
    "op,operand",
    [
        (TokenType.MINUS, StringLiteral("a")),
        (TokenType.NOT, IntegerLiteral(1)),
        (TokenType.PLUS, IntegerLiteral(1)),
    ],
)
def test_unsupported_unary(op, operand, scope):
    with pytest.raises(LangError, match="Unsupported unary operation for type"):
        UnaryOp(op, operand).evaluate(scope)


def test_unary_text():
    assert str(UnaryOp(TokenType.MINUS, Identifier("x"))) == "- x"
    assert str(UnaryOp(TokenType.NOT, Identifier("flag"))) == "not flag"
    assert str(UnaryOp(TokenType.PLUS, Identifier("x"))) == "?? x"


def test_assignment_updates_scope_and_returns_value(scope):
    expr = Assignment("x", BinaryOp(TokenType.PLUS, Identifier("x"), IntegerLiteral(1)))
    before = scope.get("x").as_int()
    result = expr.evaluate(scope)
    assert result == scope.get("x")
    assert result.as_int() - before == 1


def test_assignment_to_undefined_raises(scope):
    with pytest.raises(LangError, match="Undefined variable 'nope'"):
        Assignment("nope", IntegerLiteral(1)).evaluate(scope)


def test_assignment_text():
    assert str(Assignment("x", StringLiteral("v"))) == 'x = "v"'