import pytest
from syscomp.RUNNERS.dependency_resolver import (
    DependencyResolver,
    dependencies_of,
    edges_of,
    sorted_order,
)
from syscomp.errors import CycleError, UnknownDependencyError

CONFIG = {
    'x': {'val': 1},
    'y': {'val': 2, 'depends': 'x'},
    'sum': {'depends': ['x', 'y']},
}

def test_dependencies_of():
    assert dependencies_of(CONFIG, 'x') == []
    assert dependencies_of(CONFIG, 'y') == ['x']
    assert dependencies_of(CONFIG, 'sum') == ['x', 'y']

def test_dependencies_of_tuple_preserves_order():
    config = {'a': {}, 'b': {}, 'c': {'depends': ('b', 'a')}}
    assert dependencies_of(config, 'c') == ['b', 'a']

def test_edges_of():
    assert edges_of(CONFIG) == [('x', 'y'), ('x', 'sum'), ('y', 'sum')]
    assert edges_of({'a': {}, 'b': {}}) == []

def test_sorted_order():
    assert sorted_order(CONFIG) == ['x', 'y', 'sum']

def test_sorted_order_dependents_listed_first():
    config = {
        'server': {'depends': ['handler', 'db']},
        'handler': {'depends': 'db'},
        'db': {},
    }
    order = sorted_order(config)
    assert order == ['db', 'handler', 'server']

def test_sorted_order_keeps_independent_services_in_config_order():
    config = {'c': {}, 'a': {}, 'b': {}}
    assert sorted_order(config) == ['c', 'a', 'b']

def test_sorted_order_is_deterministic():
    config = {
        'web': {'depends': ['api', 'cache']},
        'api': {'depends': 'db'},
        'cache': {},
        'db': {},
        'worker': {'depends': ['db', 'cache']},
    }
    first = sorted_order(config)
    for _ in range(10):
        assert sorted_order(config) == first

def test_cycle_detected():
    config = {'a': {'depends': 'b'}, 'b': {'depends': 'a'}}
    with pytest.raises(CycleError) as exc_info:
        sorted_order(config)
    assert exc_info.value.cycle == ['a', 'b', 'a']

def test_transitive_cycle_detected():
    config = {
        'a': {'depends': 'b'},
        'b': {'depends': 'c'},
        'c': {'depends': 'a'},
        'd': {},
    }
    with pytest.raises(CycleError) as exc_info:
        sorted_order(config)
    assert exc_info.value.cycle == ['a', 'b', 'c', 'a']
    assert 'a -> b -> c -> a' in str(exc_info.value)

def test_self_dependency_is_a_cycle():
    with pytest.raises(CycleError) as exc_info:
        sorted_order({'a': {'depends': 'a'}})
    assert exc_info.value.cycle == ['a', 'a']

def test_unknown_dependency():
    config = {'a': {'depends': ['b', 'missing']}, 'b': {}}
    with pytest.raises(UnknownDependencyError) as exc_info:
        sorted_order(config)
    assert exc_info.value.service == 'a'
    assert exc_info.value.dependency == 'missing'
    assert str(exc_info.value) == "Service 'a' depends on unknown service 'missing'"

class TestDependencyResolver:
    """Tests for DependencyResolver."""

    def test_resolve_order(self):
        assert DependencyResolver().resolve_order(CONFIG) == ['x', 'y', 'sum']

    def test_dependents_of(self):
        resolver = DependencyResolver()
        assert resolver.dependents_of(CONFIG, 'x') == ['y', 'sum']
        assert resolver.dependents_of(CONFIG, 'sum') == []

    def test_graph(self):
        assert DependencyResolver().graph(CONFIG) == {'x': [], 'y': ['x'], 'sum': ['x', 'y']}

def test_cycle_below_the_first_service():
    config = {'a': {'depends': 'b'}, 'b': {'depends': 'c'}, 'c': {'depends': 'b'}}
    with pytest.raises(CycleError) as exc_info:
        sorted_order(config)
    assert exc_info.value.cycle == ['b', 'c', 'b']

def test_shared_dependencies_listed_once():
    config = {
        'top': {'depends': ['left', 'right']},
        'left': {'depends': 'base'},
        'right': {'depends': 'base'},
        'base': {},
    }
    assert sorted_order(config) == ['base', 'left', 'right', 'top']
