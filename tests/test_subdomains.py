"""
Test 1: Subdomain Parsers (subdomains.py)

Tests ThreeSectionSubdomainParser and SubdomainParsers.
"""

import pytest

from waymark.subdomains import SubdomainParsers, ThreeSectionSubdomainParser, is_ip_address


# ============================================================================
# ThreeSectionSubdomainParser
# ============================================================================

class TestThreeSectionSubdomainParser:

    def setup_method(self):
        self.parser = ThreeSectionSubdomainParser()

    @pytest.mark.parametrize("host, expected", [
        ("api.example.com", "api"),
        ("a.b.example.com", "a"),
        ("api.example.com:8080", "api"),
        ("API.Example.com", "API"),
        ("example.com", None),
        ("example.com:8080", None),
        ("localhost", None),
        ("localhost:5000", None),
        ("192.168.0.1", None),
        ("192.168.0.1:8080", None),
        ("::1", None),
        ("1.2.3", None),
        ("010.0.0.1", None),
        ("0x7f.0.0.1", None),
        ("1.2.3:8080", None),
        ("10.example.com", "10"),
        ("", None),
        (None, None),
    ])
    def test_execute(self, host, expected):
        assert self.parser.execute(host) == expected

    def test_callable(self):
        assert self.parser("www.example.com") == "www"

    def test_no_case_normalization(self):
        assert self.parser.execute("Shop.Example.COM") == "Shop"

    def test_empty_left_section_is_returned_verbatim(self):
        assert self.parser.execute(".example.com") == ""


# ============================================================================
# SubdomainParsers
# ============================================================================

class TestSubdomainParsers:

    def test_three_section(self):
        parse = SubdomainParsers.three_section()
        assert parse("api.example.com") == "api"
        assert parse("example.com") is None

    def test_fresh_instance_each_time(self):
        assert SubdomainParsers.three_section() is not SubdomainParsers.three_section()


# ============================================================================
# is_ip_address
# ============================================================================

class TestIsIpAddress:

    @pytest.mark.parametrize("host", [
        "192.168.0.1", "1.2.3", "127.1", "010.0.0.1", "0x7f.0.0.1", "::1", "fe80::1",
    ])
    def test_addresses(self, host):
        assert is_ip_address(host)

    @pytest.mark.parametrize("host", [
        "", "example.com", "api.example.com", "1.2.3.example", "256.256.256.256.256",
    ])
    def test_host_names(self, host):
        assert not is_ip_address(host)
