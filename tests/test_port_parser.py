"""
tests/test_port_parser.py
Unit tests for core/port_parser.py: every edge case.
Run: pytest tests/test_port_parser.py -v
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from core.port_parser import PortParser, PortParseError, parse_port


@pytest.fixture
def parser():
    return PortParser()


# ── Valid ports ───────────────────────────────────────────────────────────────

class TestValidPort:
    def test_min_port(self, parser):              assert parser.parse("1") == 1
    def test_max_port(self, parser):              assert parser.parse("65535") == 65535
    def test_common_http(self, parser):           assert parser.parse("80") == 80
    def test_common_https(self, parser):          assert parser.parse("443") == 443
    def test_whitespace_stripped(self, parser):   assert parser.parse("  22 ") == 22
    def test_leading_zeros(self, parser):         assert parser.parse("0080") == 80

    def test_module_level_helper(self):
        assert parse_port("8443") == 8443


# ── Invalid ports ─────────────────────────────────────────────────────────────

class TestInvalidPort:
    def test_zero_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="out of valid range"):
            parser.parse("0")

    def test_above_max_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="out of valid range"):
            parser.parse("65536")

    def test_negative_port_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("-80")

    def test_plus_sign_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("+80")

    def test_float_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("80.5")

    def test_alpha_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Invalid port token"):
            parser.parse("http")

    def test_empty_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="empty"):
            parser.parse("   ")

    def test_none_is_invalid(self, parser):
        with pytest.raises(PortParseError, match="Expected string"):
            parser.parse(None)

    def test_list_is_rejected(self, parser):
        with pytest.raises(PortParseError, match="single port"):
            parser.parse("80,443")

    def test_range_is_rejected(self, parser):
        with pytest.raises(PortParseError, match="single port"):
            parser.parse("1-1000")

    def test_is_value_error(self, parser):
        with pytest.raises(ValueError):
            parser.parse("abc")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
