# storefront/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import get_user_identity
from storefront.api.routers.orders import get_service
from storefront.domain.identity import UserIdentity
from storefront.domain.schemas import OrderOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/orders", response_model=List[OrderOut])
def list_my_orders(
    identity: UserIdentity = Depends(get_user_identity),
    svc: OrderService = Depends(get_service),
):
    """Historia zamowien, najnowsze pierwsze."""
    return svc.list_orders(identity)
