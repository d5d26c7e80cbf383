"""Unit tests for session tokens."""

from datetime import datetime, timedelta, timezone

import pytest

from board.config import AuthSettings
from board.domain.service import JWTService
from board.domain.value import Line
from board.util.jwt import JWTError, create_token, verify_token
from tests.conftest import make_actor

SETTINGS = AuthSettings(
    jwt_secret="unit-test-secret-that-is-long-enough-for-hs256", jwt_expiry_days=1
)


class TestSessionToken:
    """Tests for token creation and verification."""

    def test_token_carries_actor_device_and_line(self):
        """The decoded claims identify the actor and its device."""
        # Arrange
        actor = make_actor(line=Line.Q, device_id="phone")
        service = JWTService(SETTINGS)

        # Act
        payload = service.verify_token(service.create_token(actor))

        # Assert
        assert payload.actor_id == str(actor.id)
        assert payload.device_id == "phone"
        assert payload.line == "Q"

    def test_expired_token_is_rejected(self):
        """Tokens past their expiry raise JWTError."""
        # Arrange
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        token = create_token("actor", "phone", "A", SETTINGS, now=issued)

        # Act / Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_token_signed_with_other_secret_is_rejected(self):
        """A signature from another secret is invalid."""
        # Arrange
        other = AuthSettings(jwt_secret="another-secret-that-is-long-enough-for-hs256")
        token = create_token("actor", "phone", "A", other)

        # Act / Assert
        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)

    def test_bad_token_reads_as_no_session(self):
        """Missing and malformed tokens both yield no actor."""
        # Arrange
        service = JWTService(SETTINGS)

        # Act / Assert
        assert service.get_actor_id_from_token(None) is None
        assert service.get_actor_id_from_token("not-a-token") is None
