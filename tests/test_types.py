import pytest

from dashlang.types import (
    I64_MAX, I64_MIN, to_integer, check_i64, from_bool, truncating_div,
    is_truthy, loop_continues,
)


@pytest.mark.parametrize("text, expected", [
    ('0', 0), ('42', 42), ('-17', -17), ('+5', 5), ('007', 7),
    (str(I64_MAX), I64_MAX), (str(I64_MIN), I64_MIN),
])
def test_to_integer_accepts_i64_strings(text, expected):
    assert to_integer(text) == expected


@pytest.mark.parametrize("text", ['', '-', '1.0', ' 1', '1 ', '1_0', 'abc', '0x10', str(I64_MAX + 1), '١'])
def test_to_integer_rejects(text):
    with pytest.raises(ValueError):
        to_integer(text)


def test_check_i64():
    assert check_i64(I64_MAX) == I64_MAX
    with pytest.raises(OverflowError):
        check_i64(I64_MIN - 1)


def test_truncating_div():
    assert truncating_div(-9, 4) == -2
    assert truncating_div(9, -4) == -2
    with pytest.raises(ZeroDivisionError):
        truncating_div(1, 0)


def test_booleans_render_as_digits():
    assert from_bool(True) == '1'
    assert from_bool(False) == '0'


@pytest.mark.parametrize("value, if_rule, while_rule", [
    ('0', False, False),
    ('', False, True),
    ('false', False, True),
    ('1', True, True),
    ('0abc', True, True),
    ('-0', True, True),
])
def test_truthiness_rules(value, if_rule, while_rule):
    assert is_truthy(value) is if_rule
    assert loop_continues(value) is while_rule
