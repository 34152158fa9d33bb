"""Unit tests for ranges module."""

import pytest

from dhcpaudit.ranges import AddressRange, capacity, contains, format_address, parse_address


class TestParseAddress:
    """Test dotted-quad parsing."""

    def test_parse_valid(self):
        assert parse_address("10.0.0.15") == (10, 0, 0, 15)

    def test_parse_strips_whitespace(self):
        assert parse_address(" 192.168.1.1 ") == (192, 168, 1, 1)

    def test_out_of_range_octets_are_not_rejected(self):
        assert parse_address("300.0.0.1") == (300, 0, 0, 1)

    @pytest.mark.parametrize("text", ["10.0.0", "10.0.0.0.1", "a.b.c.d", ""])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError, match="Invalid IPv4 address"):
            parse_address(text)

    def test_format_address(self):
        assert format_address((10, 1, 2, 3)) == "10.1.2.3"


class TestCapacity:
    """Test range capacity arithmetic."""

    def test_single_address(self):
        assert capacity((10, 0, 0, 5), (10, 0, 0, 5)) == 1

    def test_simple_range(self):
        assert capacity((10, 0, 0, 10), (10, 0, 0, 20)) == 11

    def test_crosses_third_octet(self):
        assert capacity((10, 0, 0, 0), (10, 0, 1, 255)) == 512

    def test_full_class_b(self):
        assert capacity((172, 16, 0, 0), (172, 16, 255, 255)) == 65536

    def test_weighted_octets(self):
        # 1*256^3 + 2*256^2 + 3*256 + 4 + 1
        assert capacity((0, 0, 0, 0), (1, 2, 3, 4)) == 16909061

    def test_reversed_range_is_not_positive(self):
        assert capacity((10, 0, 0, 20), (10, 0, 0, 10)) == -9

    def test_property_matches_function(self):
        r = AddressRange.from_strings("192.168.1.100", "192.168.1.149")
        assert r.capacity == 50


class TestContains:
    """Test octet-wise membership."""

    def test_bounds_are_members(self):
        r = AddressRange.from_strings("10.0.0.10", "10.0.0.20")
        assert contains(r, r.start)
        assert contains(r, r.end)

    def test_inside_and_outside(self):
        r = AddressRange.from_strings("10.0.0.10", "10.0.0.20")
        assert r.contains((10, 0, 0, 15))
        assert not r.contains((10, 0, 0, 9))
        assert not r.contains((10, 0, 0, 21))
        assert not r.contains((10, 0, 1, 15))

    def test_box_semantics_across_octet_boundary(self):
        """Each octet is checked on its own, not the linear address."""
        r = AddressRange.from_strings("10.0.0.5", "10.0.1.20")
        assert r.contains((10, 0, 0, 15))
        assert r.contains((10, 0, 1, 15))
        # inside the linear range but outside the box
        assert not r.contains((10, 0, 0, 250))
        assert not r.contains((10, 0, 1, 1))

    def test_inverted_octet_bounds_match_nothing(self):
        r = AddressRange.from_strings("10.0.0.5", "10.0.1.2")
        assert not r.contains(r.start)
        assert not r.contains(r.end)
        assert not r.contains((10, 0, 0, 250))

class TestAddressRange:
    """Test the value type itself."""

    def test_equal_ranges_collapse_in_set(self):
        a = AddressRange.from_strings("10.0.0.10", "10.0.0.20")
        b = AddressRange.from_strings("10.0.0.10", "10.0.0.20")
        assert a == b
        assert len({a, b}) == 1

    def test_immutable(self):
        r = AddressRange.from_strings("10.0.0.10", "10.0.0.20")
        with pytest.raises(AttributeError):
            r.start = (10, 0, 0, 1)

    def test_str(self):
        assert str(AddressRange.from_strings("10.0.0.10", "10.0.0.20")) == "10.0.0.10-10.0.0.20"
