"""Session token service."""

import logfire

from board.config import AuthSettings
from board.domain.model.actor import Actor
from board.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and reads the session cookie's token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, actor: Actor) -> str:
        token = create_token(
            str(actor.id), actor.device_id, actor.line.value, self.auth_settings
        )
        logfire.info("Session token issued", actor_id=str(actor.id))
        return token

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", reason=str(e))
            raise

    def get_actor_id_from_token(self, token: str | None) -> str | None:
        """Actor ID carried by the token, or None when absent or invalid.

        Invalid tokens are treated the same as no session at all.
        """
        if not token:
            return None
        try:
            return self.verify_token(token).actor_id
        except JWTError:
            return None
