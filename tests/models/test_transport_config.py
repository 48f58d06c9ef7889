"""Tests for transport configuration models."""

import pytest
from pydantic import ValidationError

from soapx.models.config import BasicAuth, TransportConfig, default_socket_timeout


class TestBasicAuth:
    """Tests for basic auth credentials."""

    def test_login_only_has_no_colon(self) -> None:
        assert BasicAuth(login="u").credentials == "u"

    def test_login_and_password(self) -> None:
        assert BasicAuth(login="u", password="p").credentials == "u:p"

    def test_empty_password_keeps_colon(self) -> None:
        assert BasicAuth(login="u", password="").credentials == "u:"

    def test_non_string_login_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BasicAuth(login=42)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        auth = BasicAuth(login="u")
        with pytest.raises(ValidationError):
            auth.login = "v"  # type: ignore[misc]


class TestTransportConfig:
    """Tests for TransportConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = TransportConfig()

        assert config.auth is None
        assert config.content_type is None
        assert config.custom_headers == {}
        assert config.ignore_cert_verify is False
        assert config.negotiation_timeout == 0
        assert config.persistance_factor == 1
        assert config.persistance_timeout == 0

    def test_assignment_is_validated(self) -> None:
        config = TransportConfig()

        config.persistance_factor = 3
        assert config.persistance_factor == 3

        with pytest.raises(ValidationError):
            config.persistance_factor = 0
        assert config.persistance_factor == 3

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("persistance_factor", 0),
            ("negotiation_timeout", -1),
            ("persistance_timeout", -5),
            ("negotiation_timeout", "5"),
            ("persistance_factor", 2.5),
            ("ignore_cert_verify", "yes"),
            ("content_type", 42),
        ],
    )
    def test_invalid_values(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            TransportConfig(**{field: value})

    def test_empty_header_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TransportConfig(custom_headers={"": "v"})

    def test_non_string_header_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TransportConfig(custom_headers={"X-Count": 1})

    def test_header_order_preserved(self) -> None:
        config = TransportConfig(custom_headers={"B": "2", "A": "1"})

        assert list(config.custom_headers) == ["B", "A"]

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TransportConfig(retries=3)  # type: ignore[call-arg]


class TestDefaultSocketTimeout:
    """Tests for the process default socket timeout lookup."""

    def test_unset_resolves_to_zero(self, set_default_socket_timeout) -> None:
        set_default_socket_timeout(None)
        assert default_socket_timeout() == 0

    def test_integer_value(self, set_default_socket_timeout) -> None:
        set_default_socket_timeout(60)
        assert default_socket_timeout() == 60

    def test_fraction_truncated(self, set_default_socket_timeout) -> None:
        set_default_socket_timeout(2.9)
        assert default_socket_timeout() == 2

    def test_sub_second_value_disables(self, set_default_socket_timeout) -> None:
        set_default_socket_timeout(0.5)
        assert default_socket_timeout() == 0
