# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_resolver
from storefront.domain.schemas import GuestTokenOut
from storefront.services.identity_service import IdentityResolver

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/guest", response_model=GuestTokenOut, status_code=201)
def create_guest_token(resolver: IdentityResolver = Depends(get_resolver)):
    """
    Token goscia (7 dni). Nie wymaga logowania, nic nie zapisuje w bazie.
    """
    return {"token": resolver.issue_guest_token()}
