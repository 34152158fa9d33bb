"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from dhcpaudit.aggregator import UtilizationAggregator
from dhcpaudit.dhcpd_conf import parse_dhcpd_conf


SAMPLE_CONF = """\
# office network
option domain-name "example.org";
default-lease-time 600;

subnet 10.0.0.0 netmask 255.255.255.0 {
  option routers 10.0.0.1;
  range 10.0.0.10 10.0.0.20;
}

subnet 192.168.1.0 netmask 255.255.255.0 {
  range dynamic-bootp 192.168.1.100 192.168.1.149;
  range 192.168.1.200 192.168.1.209;
}

subnet 172.16.0.0 netmask 255.255.0.0 {
}
"""


@pytest.fixture
def now():
    """Fixed evaluation instant."""
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_conf():
    return SAMPLE_CONF


@pytest.fixture
def subnets(sample_conf):
    return parse_dhcpd_conf(sample_conf.splitlines(), source="dhcpd.conf")


@pytest.fixture
def aggregator(subnets):
    return UtilizationAggregator(subnets)


def lease_time(moment):
    """Format a datetime the way dhcpd writes lease timestamps."""
    return f"{moment.isoweekday() % 7} {moment:%Y/%m/%d %H:%M:%S}"


def lease_block(address, starts=None, ends=None, extra=()):
    lines = [f"lease {address} {{"]
    if starts is not None:
        lines.append(f"  starts {starts};")
    if ends is not None:
        lines.append(f"  ends {ends};")
    lines.extend(f"  {line}" for line in extra)
    lines.append("}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def fmt_time():
    return lease_time


@pytest.fixture
def make_lease():
    return lease_block


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path as a string."""
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write
