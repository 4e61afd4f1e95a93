# storefront/services/identity_service.py
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from storefront.domain.errors import Unauthenticated
from storefront.domain.identity import GuestIdentity, Identity, UserIdentity
from storefront.utils.logging import get_logger
from storefront.utils.settings import (
    GUEST_TOKEN_TTL_SECONDS,
    JWT_ALGORITHM,
    JWT_SECRET,
    USER_TOKEN_TTL_SECONDS,
)

logger = get_logger(__name__)


class IdentityResolver:
    """
    Bearer token (JWT) -> UserIdentity | GuestIdentity.
    Bezstanowy: brak rejestru gosci, wygasniecie pilnuje "exp" w tokenie.
    """

    def __init__(
        self,
        secret: str | None = None,
        algorithm: str | None = None,
        user_ttl: int | None = None,
        guest_ttl: int | None = None,
    ):
        self.secret = secret or JWT_SECRET
        self.algorithm = algorithm or JWT_ALGORITHM
        self.user_ttl = user_ttl or USER_TOKEN_TTL_SECONDS
        self.guest_ttl = guest_ttl or GUEST_TOKEN_TTL_SECONDS

    def _encode(self, claims: dict, ttl: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + timedelta(seconds=ttl)}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue_user_token(self, user_id: int) -> str:
        return self._encode({"userId": user_id}, self.user_ttl)

    def issue_guest_token(self) -> str:
        guest_id = uuid.uuid4().hex
        logger.info(f"Issued guest token for guest {guest_id}")
        return self._encode({"type": "guest", "guestId": guest_id}, self.guest_ttl)

    def decode(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token expired")
        except jwt.InvalidTokenError:
            raise Unauthenticated("Invalid token")

        if payload.get("type") == "guest":
            guest_id = payload.get("guestId")
            if isinstance(guest_id, str) and guest_id:
                return GuestIdentity(guest_id)
            raise Unauthenticated("Invalid token")

        user_id = payload.get("userId")
        if isinstance(user_id, int) and not isinstance(user_id, bool):
            return UserIdentity(user_id)
        raise Unauthenticated("Invalid token")

    def resolve(self, authorization: str | None) -> Identity:
        """Naglowek Authorization -> tozsamosc. Brak / zly naglowek -> Unauthenticated."""
        if not authorization or not authorization.startswith("Bearer "):
            raise Unauthenticated()
        token = authorization[len("Bearer "):].strip()
        if not token:
            raise Unauthenticated()
        return self.decode(token)
