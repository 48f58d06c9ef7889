"""Tests for SOAP request header construction."""

import pytest

from soapx.models.enums import SoapVersion
from soapx.transport.headers import build_header_map, build_headers, escape_action, format_headers


class TestSoap11:
    """SOAP 1.1 Content-Type and SOAPAction rules."""

    def test_action_and_default_content_type(self) -> None:
        assert build_headers(SoapVersion.SOAP_1_1, "DoWork", {}) == [
            "Content-Type: text/xml",
            'SOAPAction: "DoWork"',
        ]

    def test_empty_action_omits_soap_action(self) -> None:
        assert build_headers(SoapVersion.SOAP_1_1, "", {}) == ["Content-Type: text/xml"]

    def test_none_action_omits_soap_action(self) -> None:
        assert build_headers(SoapVersion.SOAP_1_1, None, {}) == ["Content-Type: text/xml"]

    def test_content_type_override(self) -> None:
        lines = build_headers(SoapVersion.SOAP_1_1, "DoWork", {}, "application/xml")

        assert lines == ["Content-Type: application/xml", 'SOAPAction: "DoWork"']

    def test_quotes_in_action_are_escaped(self) -> None:
        headers = build_header_map(SoapVersion.SOAP_1_1, 'urn:"quoted"', {})

        assert headers["SOAPAction"] == '"urn:\\"quoted\\""'

    def test_accepts_plain_integer_version(self) -> None:
        assert build_headers(1, "DoWork", {}) == build_headers(SoapVersion.SOAP_1_1, "DoWork", {})


class TestSoap12:
    """SOAP 1.2 action-in-Content-Type rules."""

    def test_action_parameter_without_override(self) -> None:
        assert build_headers(SoapVersion.SOAP_1_2, "DoWork", {}) == [
            'Content-Type: application/soap+xml; charset=utf-8; action="DoWork"'
        ]

    def test_no_action_without_override(self) -> None:
        assert build_headers(SoapVersion.SOAP_1_2, "", {}) == [
            "Content-Type: application/soap+xml; charset=utf-8"
        ]

    def test_override_with_token_substitution(self) -> None:
        headers = build_header_map(
            SoapVersion.SOAP_1_2, 'He said "hi"', {}, "app/custom;action={SOAPACTION}"
        )

        assert headers["Content-Type"] == 'app/custom;action=He said \\"hi\\"'

    def test_every_token_is_replaced(self) -> None:
        headers = build_header_map(SoapVersion.SOAP_1_2, "Op", {}, "{SOAPACTION}/{SOAPACTION}")

        assert headers["Content-Type"] == "Op/Op"

    def test_override_verbatim_when_action_empty(self) -> None:
        headers = build_header_map(SoapVersion.SOAP_1_2, "", {}, "app/custom;action={SOAPACTION}")

        assert headers["Content-Type"] == "app/custom;action={SOAPACTION}"

    def test_never_emits_soap_action(self) -> None:
        assert "SOAPAction" not in build_header_map(SoapVersion.SOAP_1_2, "DoWork", {})


class TestFallbackVersion:
    """Unknown versions get the bare SOAP 1.2 media type."""

    @pytest.mark.parametrize("version", [0, 3, 99])
    def test_fallback_content_type(self, version: int) -> None:
        assert build_headers(version, "DoWork", {}, "ignored/override") == [
            "Content-Type: application/soap+xml"
        ]


class TestMerging:
    """Custom header ordering and overrides."""

    def test_custom_headers_come_first(self) -> None:
        lines = build_headers(SoapVersion.SOAP_1_1, "DoWork", {"X-Trace": "1", "X-Tenant": "acme"})

        assert lines == [
            "X-Trace: 1",
            "X-Tenant: acme",
            "Content-Type: text/xml",
            'SOAPAction: "DoWork"',
        ]

    def test_computed_header_overwrites_same_name_in_place(self) -> None:
        custom = {"Content-Type": "text/plain", "X-Trace": "1"}

        lines = build_headers(SoapVersion.SOAP_1_1, "", custom)

        assert lines == ["Content-Type: text/xml", "X-Trace: 1"]

    def test_name_match_is_case_sensitive(self) -> None:
        lines = build_headers(SoapVersion.SOAP_1_1, "", {"content-type": "text/plain"})

        assert lines == ["content-type: text/plain", "Content-Type: text/xml"]

    def test_custom_headers_not_mutated(self) -> None:
        custom = {"X-Trace": "1"}

        build_header_map(SoapVersion.SOAP_1_2, "DoWork", custom)

        assert custom == {"X-Trace": "1"}

    def test_deterministic(self) -> None:
        args = (SoapVersion.SOAP_1_2, "DoWork", {"A": "1"}, "x/{SOAPACTION}")
        assert build_headers(*args) == build_headers(*args)


def test_escape_action() -> None:
    assert escape_action('a"b"c') == 'a\\"b\\"c'
    assert escape_action("plain") == "plain"


def test_format_headers() -> None:
    assert format_headers({"A": "1", "B": ""}) == ["A: 1", "B: "]
