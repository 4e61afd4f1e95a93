# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import get_inventory, get_user_identity, parse_id
from storefront.data.database import get_db
from storefront.domain.identity import UserIdentity
from storefront.domain.schemas import CartOrderIn, OrderIn, OrderOut
from storefront.services.address_service import AddressDeduplicator
from storefront.services.inventory_service import InventoryService
from storefront.services.order_service import CartOrder, ExplicitOrder, OrderLine, OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    request: Request,
    db: Session = Depends(get_db),
    inventory: InventoryService = Depends(get_inventory),
) -> OrderService:
    return OrderService(
        db=db,
        inventory=inventory,
        addresses=AddressDeduplicator(db),
        notifications=request.app.state.notifications,
    )


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderIn,
    identity: UserIdentity = Depends(get_user_identity),
    svc: OrderService = Depends(get_service),
):
    """
    Zamowienie z jawnej listy pozycji. Koszyk zostaje bez zmian.
    """
    request = ExplicitOrder(
        items=[OrderLine(variant_id=i.variant_id, quantity=i.quantity) for i in payload.items],
        shipping=payload.shipping.model_dump(),
        payment={"method": payload.payment.method},
    )
    return svc.place_order(identity, request)


@router.post("/from-cart", response_model=OrderOut, status_code=201)
def create_order_from_cart(
    payload: CartOrderIn,
    identity: UserIdentity = Depends(get_user_identity),
    svc: OrderService = Depends(get_service),
):
    """
    Zamowienie z zawartosci koszyka na zapisany adres. Koszyk jest czyszczony.
    """
    request = CartOrder(address_id=payload.address_id, payment_method=payload.payment_method)
    return svc.place_order(identity, request)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    identity: UserIdentity = Depends(get_user_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.get_order(identity, parse_id(order_id, "Invalid order ID"))
