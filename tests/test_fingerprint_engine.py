"""Behavior-focused tests for the fingerprint engine."""

import hashlib
import re
from dataclasses import replace

import pytest

from request_fingerprint.application.fingerprint_engine import (
    build_fingerprint_parts,
    compute_fingerprint,
    serialize_fingerprint_parts,
)
from request_fingerprint.domain.models import PrimaryHeaders, RequestAttributes

SCENARIO_A_STRING = (
    "ip:203.0.113.5|method:GET|protocol:HTTP/1.1|ua:TestBot/1.0|accept:|accept-lang:|accept-enc:"
)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@pytest.fixture
def scenario_a() -> RequestAttributes:
    return RequestAttributes(
        client_address="203.0.113.5",
        method="GET",
        protocol_version="HTTP/1.1",
        primary_headers=PrimaryHeaders(user_agent="TestBot/1.0"),
    )


class TestConcreteScenarios:
    """Tests pinning the exact serialized form and digest."""

    def test_when_only_primary_fields_then_serializes_fixed_prefix(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given scenario A attributes, when serializing, then matches the fixed prefix."""
        assert serialize_fingerprint_parts(scenario_a) == SCENARIO_A_STRING
        assert compute_fingerprint(scenario_a) == _sha256(SCENARIO_A_STRING)

    def test_when_extra_headers_present_then_appended_sorted(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given dnt and connection headers, when serializing, then tail is sorted by name."""
        attributes = replace(scenario_a, extra_headers={"dnt": "1", "connection": "keep-alive"})

        expected = SCENARIO_A_STRING + "|connection:keep-alive|dnt:1"

        assert serialize_fingerprint_parts(attributes) == expected
        assert compute_fingerprint(attributes) == _sha256(expected)

    def test_when_tls_and_port_present_then_follow_protocol(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given TLS version and port, when building parts, then they sit between protocol and ua."""
        attributes = replace(scenario_a, tls_version="TLS1.3", port="8443")

        parts = build_fingerprint_parts(attributes)

        assert parts[:6] == [
            "ip:203.0.113.5",
            "method:GET",
            "protocol:HTTP/1.1",
            "tls:TLS1.3",
            "port:8443",
            "ua:TestBot/1.0",
        ]

    def test_digest_is_64_lowercase_hex_characters(self, scenario_a: RequestAttributes) -> None:
        """Given any attributes, when computing, then result is 64 lowercase hex chars."""
        assert re.fullmatch(r"[0-9a-f]{64}", compute_fingerprint(scenario_a))


class TestFingerprintProperties:
    """Tests for determinism, sensitivity and ordering properties."""

    def test_repeated_computation_is_deterministic(self, scenario_a: RequestAttributes) -> None:
        """Given the same attributes, when computing twice, then digests are identical."""
        assert compute_fingerprint(scenario_a) == compute_fingerprint(scenario_a)

    @pytest.mark.parametrize(
        "changes",
        [
            {"client_address": "203.0.113.6"},
            {"method": "POST"},
            {"protocol_version": "HTTP/2"},
            {"tls_version": "TLS1.2"},
            {"port": "8080"},
            {"primary_headers": PrimaryHeaders(user_agent="OtherBot/2.0")},
            {"primary_headers": PrimaryHeaders(user_agent="TestBot/1.0", accept="text/html")},
            {"primary_headers": PrimaryHeaders(user_agent="TestBot/1.0", accept_language="de")},
            {"primary_headers": PrimaryHeaders(user_agent="TestBot/1.0", accept_encoding="gzip")},
            {"extra_headers": {"dnt": "1"}},
        ],
    )
    def test_when_single_field_changes_then_digest_changes(
        self, scenario_a: RequestAttributes, changes: dict
    ) -> None:
        """Given one changed field, when computing, then digest differs."""
        changed = replace(scenario_a, **changes)

        assert compute_fingerprint(changed) != compute_fingerprint(scenario_a)

    def test_when_extra_headers_inserted_in_different_order_then_digest_is_equal(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given the same headers in different insertion order, then digests match."""
        first = replace(
            scenario_a,
            extra_headers={"sec-fetch-mode": "navigate", "dnt": "1", "connection": "close"},
        )
        second = replace(
            scenario_a,
            extra_headers={"connection": "close", "sec-fetch-mode": "navigate", "dnt": "1"},
        )

        assert compute_fingerprint(first) == compute_fingerprint(second)

    def test_when_tls_and_port_absent_then_parts_are_omitted(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given no TLS and no port, then fewer parts are built, not empty placeholders."""
        with_transport = replace(scenario_a, tls_version="TLS1.3", port="443")

        assert len(build_fingerprint_parts(scenario_a)) == 7
        assert len(build_fingerprint_parts(with_transport)) == 9
        parts = build_fingerprint_parts(scenario_a)
        assert not any(part.startswith(("tls:", "port:")) for part in parts)

    def test_when_tls_is_empty_string_then_treated_as_absent(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given empty TLS and port strings, when computing, then same as absent."""
        empty = replace(scenario_a, tls_version="", port="")

        assert build_fingerprint_parts(empty) == build_fingerprint_parts(scenario_a)

    def test_empty_primary_headers_are_kept_as_parts(self, scenario_a: RequestAttributes) -> None:
        """Given empty primary headers, when building parts, then keys still appear."""
        parts = build_fingerprint_parts(scenario_a)

        assert "accept:" in parts
        assert "accept-lang:" in parts
        assert "accept-enc:" in parts

    def test_when_extra_headers_repeat_primary_names_then_they_are_skipped(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given primary header names in extra headers, then they do not enter the tail."""
        duplicated = replace(
            scenario_a,
            extra_headers={"user-agent": "Spoofed/1.0", "accept": "*/*", "dnt": "1"},
        )

        assert serialize_fingerprint_parts(duplicated) == SCENARIO_A_STRING + "|dnt:1"

    def test_non_ascii_values_are_hashed_as_utf8(self, scenario_a: RequestAttributes) -> None:
        """Given non-ASCII header values, when computing, then the UTF-8 bytes are hashed."""
        attributes = replace(scenario_a, primary_headers=PrimaryHeaders(user_agent="Bröwser/1.0"))

        expected = SCENARIO_A_STRING.replace("TestBot/1.0", "Bröwser/1.0")

        assert compute_fingerprint(attributes) == _sha256(expected)

    def test_surrogate_escaped_bytes_are_hashed_as_raw_bytes(
        self, scenario_a: RequestAttributes
    ) -> None:
        """Given a value holding undecodable bytes, when computing, then those bytes are hashed."""
        attributes = replace(scenario_a, primary_headers=PrimaryHeaders(user_agent="Bad\udcff"))

        expected = SCENARIO_A_STRING.replace("TestBot/1.0", "Bad").encode("utf-8")
        expected = expected.replace(b"ua:Bad", b"ua:Bad\xff")

        assert compute_fingerprint(attributes) == hashlib.sha256(expected).hexdigest()
