import pytest

from bcc.environment import Environment


def test_get_walks_the_parent_chain():
    outer = Environment()
    outer.define('x', 1)
    inner = Environment(parent=outer)
    assert inner.get('x') == 1
    assert inner.is_defined('x')
    with pytest.raises(KeyError):
        inner.get('missing')


def test_assign_updates_the_nearest_owner():
    outer = Environment()
    outer.define('x', 1)
    inner = Environment(parent=outer)
    inner.assign('x', 2)
    assert outer.get('x') == 2
    assert 'x' not in inner.values


def test_assign_defines_unknown_names_locally():
    outer = Environment()
    inner = Environment(parent=outer)
    inner.assign('y', 3)
    assert inner.values == {'y': 3}
    assert not outer.is_defined('y')


def test_define_shadows():
    outer = Environment()
    outer.define('x', 1)
    inner = Environment(parent=outer)
    inner.define('x', 'inner')
    assert inner.get('x') == 'inner'
    assert outer.get('x') == 1
    assert inner.find('x') is inner


def test_depth_and_chain():
    root = Environment()
    child = Environment(parent=root)
    grandchild = Environment(parent=child)
    assert root.depth() == 0
    assert grandchild.depth() == 2
    assert list(grandchild.chain()) == [grandchild, child, root]
