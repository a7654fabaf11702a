import pytest

from modelhttp.method import Method, UnknownMethod


def test_parse_get():
    assert Method.parse("GET") is Method.GET


def test_parse_head():
    assert Method.parse("HEAD") is Method.HEAD


@pytest.mark.parametrize("method", list(Method))
def test_string_round_trip(method):
    assert Method.parse(str(method)) is method


def test_str_is_name():
    assert str(Method.parse("HEAD")) == "HEAD"


@pytest.mark.parametrize("name", ["POST", "get", "", "PUT"])
def test_unknown_methods_raise(name):
    with pytest.raises(UnknownMethod):
        Method.parse(name)


def test_error_carries_name():
    with pytest.raises(UnknownMethod) as excinfo:
        Method.parse("DELETE")
    assert str(excinfo.value) == "DELETE"


def test_unknown_method_is_value_error():
    with pytest.raises(ValueError, match="PATCH"):
        Method.parse("PATCH")