import pytest
from syscomp.UTILS.string_interpolation import EnvironmentInterpolator

def test_interpolate():
    context = {'HOST': 'db', 'EMPTY': ''}
    assert EnvironmentInterpolator.interpolate("${HOST}:5432", context) == "db:5432"
    assert EnvironmentInterpolator.interpolate("${PORT:-5432}", context) == "5432"
    assert EnvironmentInterpolator.interpolate("${EMPTY:-fallback}", context) == "fallback"
    assert EnvironmentInterpolator.interpolate("${HOST:+set}", context) == "set"
    assert EnvironmentInterpolator.interpolate("${EMPTY:+set}", context) == ""

def test_unset_strict():
    with pytest.raises(KeyError):
        EnvironmentInterpolator.interpolate("${MISSING}", {})

def test_unset_lenient():
    assert EnvironmentInterpolator.interpolate("a${MISSING}b", {}, strict=False) == "ab"
