# storefront/api/deps.py
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import InvalidInput, Unauthenticated
from storefront.domain.identity import Identity, UserIdentity
from storefront.domain.schemas import MAX_ID
from storefront.services.identity_service import IdentityResolver
from storefront.services.inventory_service import InventoryService


def get_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


def get_identity(
    authorization: str | None = Header(default=None),
    resolver: IdentityResolver = Depends(get_resolver),
) -> Identity:
    """Cart/order nie maja sciezki anonimowej - brak tokenu to 401."""
    return resolver.resolve(authorization)


def get_user_identity(identity: Identity = Depends(get_identity)) -> UserIdentity:
    if not isinstance(identity, UserIdentity):
        raise Unauthenticated("Sign in required")
    return identity


def get_inventory(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(db)


def parse_id(raw: str, message: str) -> int:
    """Id ze sciezki: dodatnia liczba calkowita (cyfry ASCII, zakres int4), inaczej 400."""
    if not (raw.isascii() and raw.isdigit()) or not 0 < int(raw) <= MAX_ID:
        raise InvalidInput(message, field="id")
    return int(raw)
