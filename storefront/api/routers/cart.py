# storefront/api/routers/cart.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity, get_inventory, parse_id
from storefront.data.database import get_db
from storefront.domain.identity import Identity
from storefront.domain.schemas import CartItemIn, CartLineOut, CartQuantityIn
from storefront.services.cart_service import CartService
from storefront.services.inventory_service import InventoryService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    inventory: InventoryService = Depends(get_inventory),
) -> CartService:
    return CartService(db=db, inventory=inventory)


@router.post("", response_model=CartLineOut, status_code=201)
def add_item(
    payload: CartItemIn,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    return svc.add_line(identity, payload.variant_id, payload.quantity)


@router.get("", response_model=List[CartLineOut])
def list_items(
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    return svc.list_lines(identity)


@router.patch("/{item_id}", response_model=CartLineOut)
def update_item_quantity(
    item_id: str,
    payload: CartQuantityIn,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    return svc.update_quantity(identity, parse_id(item_id, "Invalid item ID"), payload.quantity)


@router.delete("/{item_id}", status_code=204)
def remove_item(
    item_id: str,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    svc.remove_line(identity, parse_id(item_id, "Invalid item ID"))
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_cart(
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    svc.clear_cart(identity)
    return Response(status_code=204)
