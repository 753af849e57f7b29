"""
Single use CSRF tokens.

Tokens live for 30 minutes, at most 10 unexpired tokens are kept, and a token is
consumed by its first successful validation.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .sanitizers import generate_nonce
from .security_logger import log_security_event

TOKEN_LIFETIME_SECONDS = 30 * 60
MAX_TOKENS = 10


@dataclass
class CSRFToken:
    token: str
    issued_at: float
    session_id: str
    used: bool = False


def _redact(token: str) -> str:
    return token[:8] + "..."


class CSRFProtection:
    """Issues and validates CSRF tokens."""

    def __init__(
        self,
        lifetime_seconds: float = TOKEN_LIFETIME_SECONDS,
        max_tokens: int = MAX_TOKENS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._tokens: Dict[str, CSRFToken] = {}
        self._lifetime = lifetime_seconds
        self._max_tokens = max_tokens
        self._clock = clock

    def _expired(self, token: CSRFToken, now: float) -> bool:
        return now - token.issued_at > self._lifetime

    def generate_token(self, session_id: Optional[str] = None) -> str:
        token = generate_nonce()
        now = self._clock()
        self.cleanup()
        self._tokens[token] = CSRFToken(token=token, issued_at=now, session_id=session_id or "anonymous")

        # dicts keep insertion order, so the oldest tokens come first
        while len(self._tokens) > self._max_tokens:
            del self._tokens[next(iter(self._tokens))]
        return token

    def validate_token(self, token: str, user_id: Optional[str] = None) -> bool:
        """
        Check a token and consume it.

        Args:
            token: The token sent by the client
            user_id: The requesting user, recorded on security events

        Returns:
            True when the token was known, unused and unexpired
        """
        token_data = self._tokens.get(token)

        if token_data is None:
            log_security_event(
                event_type="CSRF_TOKEN_NOT_FOUND",
                severity="high",
                description="CSRF token validation failed - token not found",
                user_id=user_id,
                additional_data={"token": _redact(token)},
            )
            return False

        if token_data.used:
            log_security_event(
                event_type="CSRF_TOKEN_REUSE",
                severity="high",
                description="CSRF token reuse attempt detected",
                user_id=user_id,
                additional_data={"token": _redact(token)},
            )
            return False

        if self._expired(token_data, self._clock()):
            log_security_event(
                event_type="CSRF_TOKEN_EXPIRED",
                severity="medium",
                description="Expired CSRF token used",
                user_id=user_id,
                additional_data={"token": _redact(token)},
            )
            del self._tokens[token]
            return False

        token_data.used = True
        return True

    def cleanup(self) -> int:
        """Drop expired tokens and return how many were removed."""
        now = self._clock()
        expired = [key for key, data in self._tokens.items() if self._expired(data, now)]
        for key in expired:
            del self._tokens[key]
        return len(expired)

    def token_count(self) -> int:
        return len(self._tokens)

    def clear(self) -> None:
        self._tokens.clear()


csrf_protection = CSRFProtection()
