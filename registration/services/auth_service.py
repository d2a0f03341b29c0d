# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Authentication service — admin credential check and bearer token issue/verify."""
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from registration.core.exceptions import AuthenticationError
from registration.core.logging import get_logger
from registration.metrics import LOGIN_ATTEMPTS

logger = get_logger(__name__)

ADMIN_ROLE = "admin"


class AuthService:
    def __init__(
        self,
        username: str,
        password: str,
        secret: str,
        algorithm: str = "HS256",
        expires_hours: int = 24,
    ) -> None:
        self._username = username
        self._password = password
        # No configured secret: sign with a per-process random key; tokens die on restart.
        self.ephemeral_secret = not secret
        self._secret = secret or secrets.token_urlsafe(32)
        self._algorithm = algorithm
        self._expires = timedelta(hours=expires_hours)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        if not self._check_credentials(username, password):
            LOGIN_ATTEMPTS.labels(outcome="rejected").inc()
            logger.warning("Rejected admin login for '%s'", username)
            raise AuthenticationError("Invalid credentials")

        LOGIN_ATTEMPTS.labels(outcome="success").inc()
        logger.info("Admin login: %s", username)
        user = {"username": username, "role": ADMIN_ROLE}
        return {"success": True, "token": self.issue_token(username), "user": user}

    def issue_token(self, username: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "role": ADMIN_ROLE,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid or expired token")
        if claims.get("role") != ADMIN_ROLE:
            raise AuthenticationError("Insufficient role")
        return claims

    def _check_credentials(self, username: str, password: str) -> bool:
        # An unconfigured account never matches, not even empty input.
        if not self._username or not self._password or not username or not password:
            return False
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self._password.encode())
        return user_ok and pass_ok
