# storefront/services/order_service.py
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Union

from sqlalchemy.orm import Session

from storefront.data.database import unit_of_work
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderItemModel, OrderModel
from storefront.domain.errors import EmptyOrder, InsufficientStock, OrderNotFound, Unauthenticated
from storefront.domain.identity import Identity, UserIdentity
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.address_service import AddressDeduplicator
from storefront.services.cart_service import check_quantity
from storefront.services.inventory_service import InventoryService, product_summary, variant_summary
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger
from storefront.utils.money import to_money

logger = get_logger(__name__)


@dataclass(frozen=True)
class OrderLine:
    variant_id: int
    quantity: int


@dataclass
class ExplicitOrder:
    """Jawna lista pozycji + adres i platnosc inline. Koszyk nie jest ruszany."""

    items: List[OrderLine]
    shipping: Dict[str, Any]
    payment: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CartOrder:
    """Pozycje z koszyka, istniejacy adres. Koszyk czyszczony po sukcesie."""

    address_id: int
    payment_method: str | None = None


OrderRequest = Union[ExplicitOrder, CartOrder]


def _require_user(identity: Identity) -> int:
    #gosc nie ma adresow ani zamowien
    if not isinstance(identity, UserIdentity):
        raise Unauthenticated("Sign in to place or view orders")
    return identity.id


class OrderService:
    """
    Domena zamowien: walidacja, wycena, adres, zapis i rezerwacja stanu
    w jednej transakcji.
    """

    def __init__(
        self,
        db: Session,
        inventory: InventoryService,
        addresses: AddressDeduplicator,
        notifications: NotificationService,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.inventory = inventory
        self.addresses = addresses
        self.notifications = notifications

    # =====================================================
    # COMMANDS
    # =====================================================
    def place_order(self, identity: Identity, request: OrderRequest) -> Dict[str, Any]:
        """
        1. pusta lista -> EmptyOrder
        2. kazdy wariant musi istniec (VariantNotFound z id)
        3. stan sprawdzany dla WSZYSTKICH pozycji przed jakimkolwiek zapisem
        4. cena jednostkowa = baza + roznica wariantu, total zaokraglony do 2 miejsc
        5. adres (find-or-create albo istniejacy)
        6. naglowek + pozycje + rezerwacje (+ czyszczenie koszyka) atomowo
        7. zwraca zamowienie w statusie pending
        """
        user_id = _require_user(identity)

        if isinstance(request, CartOrder):
            lines = [
                OrderLine(variant_id=line.variant_id, quantity=line.quantity)
                for line in self.cart_repo.get_lines(identity)
            ]
            payment_method = request.payment_method or "unspecified"
        else:
            lines = list(request.items)
            payment_method = request.payment.get("method") or "unspecified"

        if not lines:
            raise EmptyOrder()

        for line in lines:
            check_quantity(line.quantity)

        # 2 + 3: walidacja calosci zanim cokolwiek zapiszemy
        stock = self.inventory.get_stocks(line.variant_id for line in lines)

        requested: Dict[int, int] = OrderedDict()
        for line in lines:
            requested[line.variant_id] = requested.get(line.variant_id, 0) + line.quantity

        for variant_id, quantity in requested.items():
            if quantity > stock[variant_id].stock:
                logger.warning(
                    f"Order for user {user_id} rejected: variant {variant_id} "
                    f"requested {quantity}, stock {stock[variant_id].stock}"
                )
                raise InsufficientStock(variant_id)

        # 4: wycena ze snapshotem ceny
        priced = [(line, stock[line.variant_id].unit_price) for line in lines]
        total = to_money(sum((price * line.quantity for line, price in priced), Decimal("0")))

        # 5-6: jedna transakcja
        with unit_of_work(self.db):
            address = self._resolve_address(user_id, request)

            order = OrderModel(
                user_id=user_id,
                address_id=address.id,
                status="pending",
                total=total,
                payment_method=payment_method,
                items=[
                    OrderItemModel(
                        variant_id=line.variant_id,
                        quantity=line.quantity,
                        unit_price=price,
                    )
                    for line, price in priced
                ],
            )
            created = self.repo.add_order(order)

            #warunkowy UPDATE per wariant - przegrany wyscig = rollback calosci
            for variant_id, quantity in requested.items():
                self.inventory.try_reserve(variant_id, quantity)

            if isinstance(request, CartOrder):
                self.cart_repo.delete_lines(identity, commit=False)

        logger.info(
            f"Order {created.id} placed by user {user_id}: "
            f"{len(priced)} line(s), total {total}"
        )

        self.notifications.order_placed(user_id, created.id)

        return self.order_view(created, address)

    def _resolve_address(self, user_id: int, request: OrderRequest) -> AddressModel:
        if isinstance(request, CartOrder):
            return self.addresses.get_owned(user_id, request.address_id)
        return self.addresses.resolve(user_id, request.shipping)

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, identity: Identity, order_id: int) -> Dict[str, Any]:
        user_id = _require_user(identity)

        #cudze zamowienie == nieistniejace (nie potwierdzamy istnienia id)
        order = self.repo.get_order_for_user(order_id, user_id)
        if not order:
            raise OrderNotFound(order_id)
        return self.order_view(order)

    def list_orders(self, identity: Identity) -> List[Dict[str, Any]]:
        user_id = _require_user(identity)
        return [self.order_view(order) for order in self.repo.list_orders_for_user(user_id)]

    @staticmethod
    def order_view(order: OrderModel, address: AddressModel | None = None) -> Dict[str, Any]:
        address = address or order.address
        items = []
        for item in order.items:
            variant = item.variant
            unit = to_money(item.unit_price)
            items.append(
                {
                    "id": str(item.id),
                    "product_id": str(variant.product_id),
                    "variant_id": str(item.variant_id),
                    "quantity": item.quantity,
                    "unit_price": unit,
                    "line_total": to_money(unit * item.quantity),
                    "product": product_summary(variant),
                    "variant": variant_summary(variant),
                }
            )

        return {
            "id": str(order.id),
            "status": order.status,
            "total": to_money(order.total),
            "items": items,
            "shipping_address": AddressDeduplicator.view(address) if address else None,
            "payment_method": order.payment_method,
            "tracking_number": order.tracking_number,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }
