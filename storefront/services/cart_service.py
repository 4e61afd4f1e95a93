# storefront/services/cart_service.py
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import InsufficientStock, InvalidQuantity, LineNotFound, VariantNotFound
from storefront.domain.identity import Identity, owner_columns
from storefront.repos.cart_repo import CartRepo
from storefront.services.inventory_service import InventoryService, product_summary, variant_summary
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def check_quantity(quantity) -> int:
    #bool to podklasa int - True nie jest iloscia
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity()
    return quantity


def _describe(owner: Identity) -> str:
    return f"{'guest' if owner.is_guest else 'user'} {owner.id}"


class CartService:
    """
    Koszyk per tozsamosc (user albo guest), nigdy miedzy tozsamosciami.
    commands (add, update, remove, clear) modyfikuja stan
    query (list) tylko odczyt

    Stan magazynu jest tylko sprawdzany (swiezy odczyt), zmniejsza go dopiero zamowienie.
    """

    def __init__(self, db: Session, inventory: InventoryService):
        self.repo = CartRepo(db)
        self.inventory = inventory

    @staticmethod
    def line_view(line: CartItemModel) -> Dict[str, Any]:
        variant = line.variant
        return {
            "id": str(line.id),
            "variant_id": str(line.variant_id),
            "quantity": line.quantity,
            "product": product_summary(variant),
            "variant": variant_summary(variant),
        }

    #query - odczyt
    def list_lines(self, owner: Identity) -> List[Dict[str, Any]]:
        return [self.line_view(line) for line in self.repo.get_lines(owner)]

    #commands
    def add_line(self, owner: Identity, variant_id: int, quantity: int) -> Dict[str, Any]:
        check_quantity(quantity)

        try:
            info = self.inventory.get_stock(variant_id)
        except VariantNotFound:
            #w koszyku bez id w komunikacie, id podaje dopiero zamowienie
            raise VariantNotFound() from None
        existing = self.repo.get_line_for_variant(owner, variant_id)

        #sprawdzamy laczna ilosc (to co juz jest w koszyku + dodawane)
        requested = quantity + (existing.quantity if existing else 0)
        if requested > info.stock:
            logger.warning(
                f"Add to cart rejected for {_describe(owner)}: variant {variant_id} "
                f"requested {requested}, stock {info.stock}"
            )
            raise InsufficientStock(variant_id, "Insufficient stock")

        if existing:
            logger.info(
                f"Variant {variant_id} already in cart of {_describe(owner)}, "
                f"quantity {existing.quantity} -> {requested}"
            )
            existing.quantity = requested
            line = self.repo.add_line(existing)
        else:
            logger.info(f"Adding variant {variant_id} x{quantity} to cart of {_describe(owner)}")
            line = self.repo.add_line(
                CartItemModel(
                    variant_id=variant_id,
                    quantity=quantity,
                    **owner_columns(owner),
                )
            )

        return self.line_view(line)

    def update_quantity(self, owner: Identity, line_id: int, quantity: int) -> Dict[str, Any]:
        check_quantity(quantity)

        line = self.repo.get_line(owner, line_id)
        if not line:
            raise LineNotFound(line_id)

        info = self.inventory.get_stock(line.variant_id)
        if quantity > info.stock:
            logger.warning(
                f"Quantity update rejected for line {line_id} of {_describe(owner)}: "
                f"requested {quantity}, stock {info.stock}"
            )
            raise InsufficientStock(line.variant_id, "Insufficient stock")

        logger.info(f"Line {line_id} of {_describe(owner)}: quantity {line.quantity} -> {quantity}")
        line.quantity = quantity
        return self.line_view(self.repo.add_line(line))

    def remove_line(self, owner: Identity, line_id: int):
        line = self.repo.get_line(owner, line_id)
        if not line:
            raise LineNotFound(line_id)

        self.repo.delete_line(line)
        logger.info(f"Line {line_id} removed from cart of {_describe(owner)}")

    def clear_cart(self, owner: Identity) -> int:
        removed = self.repo.delete_lines(owner)
        logger.info(f"Cart of {_describe(owner)} cleared ({removed} line(s))")
        return removed
