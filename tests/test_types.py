import pytest

from bcc.types import (
    NIL, NilVal, TupleVal, fits_int, format_double, is_int, is_number,
    is_truthy, to_string, type_name, values_equal,
)


def test_nil_is_a_singleton():
    assert NilVal() is NIL


def test_type_names():
    assert type_name(NIL) == 'nil'
    assert type_name(True) == 'bool'
    assert type_name(1) == 'int'
    assert type_name(1.0) == 'double'
    assert type_name('s') == 'string'
    assert type_name(TupleVal((1,))) == 'tuple'


def test_bool_is_not_an_int():
    assert not is_int(True)
    assert not is_number(False)
    assert is_int(0)
    assert is_number(0.5)


@pytest.mark.parametrize('value', [0, 0.0, '', TupleVal(()), NIL, False])
def test_falsy_values(value):
    assert is_truthy(value) is False


@pytest.mark.parametrize('value', [-1, 1, 0.1, '0', ' ', TupleVal((0,)), True])
def test_truthy_values(value):
    assert is_truthy(value) is True


def test_equality_across_variants():
    assert values_equal(1, 1.0)
    assert not values_equal('1', 1)
    assert not values_equal(True, 1)
    assert not values_equal(NIL, False)
    assert values_equal(NIL, NIL)
    assert values_equal(TupleVal((1, 'a')), TupleVal((1.0, 'a')))
    assert not values_equal(TupleVal((1,)), TupleVal((1, 2)))
    assert not values_equal(TupleVal((True,)), TupleVal((1,)))


def test_double_display():
    assert format_double(3.0) == '3.0'
    assert format_double(-0.5) == '-0.5'
    assert format_double(0.1 + 0.2) == '0.30000000000000004'
    assert format_double(1e20) == '100000000000000000000.0'
    assert format_double(1.5e-7) == '0.00000015'
    assert format_double(float('inf')) == 'inf'
    assert format_double(float('-inf')) == '-inf'
    assert format_double(float('nan')) == 'NaN'


def test_display_forms():
    assert to_string(NIL) == 'nil'
    assert to_string(True) == 'true'
    assert to_string(-12) == '-12'
    assert to_string('plain') == 'plain'
    assert to_string(TupleVal(())) == '()'
    assert to_string(TupleVal((1,))) == '(1,)'
    assert to_string(TupleVal((1, 2.0, 'x', NIL))) == '(1, 2.0, x, nil)'
    assert to_string(TupleVal((TupleVal((1,)), TupleVal(())))) == '((1,), ())'


def test_fits_int():
    assert fits_int(2 ** 63 - 1)
    assert fits_int(-(2 ** 63))
    assert not fits_int(2 ** 63)
    assert not fits_int(-(2 ** 63) - 1)
