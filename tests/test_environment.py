from alp.environment import Environment, new_enclosed_environment, new_environment
from alp.types import Integer


def test_get_missing_name():
    env = new_environment()
    assert env.get('x') == (None, False)
    assert 'x' not in env


def test_set_and_get():
    env = new_environment()
    value = env.set('x', Integer(1))
    assert value == Integer(1)
    assert env.get('x') == (Integer(1), True)


def test_lookup_walks_outward():
    outer = new_environment()
    outer.set('x', Integer(1))
    inner = new_enclosed_environment(outer)
    innermost = new_enclosed_environment(inner)
    assert innermost.get('x') == (Integer(1), True)
    assert 'x' in innermost


def test_set_shadows_instead_of_overwriting_outer():
    outer = Environment()
    outer.set('x', Integer(1))
    inner = new_enclosed_environment(outer)
    inner.set('x', Integer(2))
    assert inner.get('x') == (Integer(2), True)
    assert outer.get('x') == (Integer(1), True)


def test_outer_is_shared_not_copied():
    outer = Environment()
    inner = new_enclosed_environment(outer)
    outer.set('late', Integer(7))
    assert inner.get('late') == (Integer(7), True)
