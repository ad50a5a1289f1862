import random
import string
import pytest
from syscomp.PARSERS.config_parser import ConfigParser
from syscomp.UTILS.string_interpolation import EnvironmentInterpolator
from syscomp.errors import ConfigFileError

def random_string(rng, length):
    return ''.join(rng.choice(string.printable) for _ in range(length))

def test_fuzz_config_parser():
    rng = random.Random(42)
    parser = ConfigParser(context={})
    for _ in range(200):
        content = random_string(rng, rng.randint(0, 500))
        try:
            config = parser.parse_from_string(content)
        except ConfigFileError:
            continue
        assert isinstance(config, dict)
        assert all(isinstance(record, dict) for record in config.values())

def test_fuzz_interpolator():
    rng = random.Random(3)
    alphabet = 'AB${}:-+x '
    for _ in range(200):
        template = ''.join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))
        result = EnvironmentInterpolator.interpolate(template, {'A': 'a'}, strict=False)
        assert isinstance(result, str)

def test_edge_cases_parsers():
    parser = ConfigParser()

    assert parser.parse_from_string("") == {}
    assert parser.parse_from_string("   \n\n  ") == {}
    assert parser.parse_from_string("# only a comment\n") == {}

    long_name = "a" * 10000
    assert parser.parse_from_string(f"{long_name}: {{}}\n") == {long_name: {}}
