# storefront/services/inventory_service.py
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductVariantModel
from storefront.domain.errors import InsufficientStock, VariantNotFound
from storefront.repos.variant_repo import VariantRepo
from storefront.utils.logging import get_logger
from storefront.utils.money import to_money

logger = get_logger(__name__)


def unit_price(variant: ProductVariantModel) -> Decimal:
    """Cena jednostkowa = cena bazowa produktu + roznica wariantu."""
    return to_money(Decimal(variant.product.price) + Decimal(variant.price_diff or 0))


@dataclass(frozen=True)
class StockInfo:
    variant_id: int
    stock: int
    unit_price: Decimal
    variant: ProductVariantModel


class InventoryService:
    """
    Jedyne miejsce ktore czyta i zmniejsza stan magazynowy wariantow.
    - get_stock: swiezy odczyt (walidacja koszyka i zamowienia)
    - try_reserve: atomowe sprawdz-i-zmniejsz jednym warunkowym UPDATE
    """

    def __init__(self, db: Session):
        self.repo = VariantRepo(db)

    def get_stock(self, variant_id: int) -> StockInfo:
        variant = self.repo.get_variant(variant_id)
        if not variant:
            raise VariantNotFound(variant_id)
        return StockInfo(
            variant_id=variant.id,
            stock=variant.stock,
            unit_price=unit_price(variant),
            variant=variant,
        )

    def get_stocks(self, variant_ids) -> dict[int, StockInfo]:
        """Odczyt wielu wariantow naraz; pierwszy brakujacy id (w kolejnosci) -> VariantNotFound."""
        variant_ids = list(variant_ids)
        found = self.repo.get_variants(variant_ids)
        for variant_id in variant_ids:
            if variant_id not in found:
                raise VariantNotFound(variant_id)
        return {
            vid: StockInfo(variant_id=vid, stock=v.stock, unit_price=unit_price(v), variant=v)
            for vid, v in found.items()
        }

    def try_reserve(self, variant_id: int, quantity: int):
        """
        Rezerwacja = warunkowy UPDATE, nigdy osobny odczyt + zapis.
        Nie commituje: wywolujacy trzyma transakcje (unit_of_work).
        """
        if quantity <= 0:
            raise ValueError("Reservation quantity must be positive")

        rowcount = self.repo.decrement_stock(variant_id, quantity)
        if rowcount == 1:
            logger.info(f"Reserved {quantity} unit(s) of variant {variant_id}")
            return

        #0 wierszy: albo wariant nie istnieje albo za maly stan
        if not self.repo.exists(variant_id):
            raise VariantNotFound(variant_id)

        logger.warning(f"Reservation of {quantity} unit(s) of variant {variant_id} rejected: insufficient stock")
        raise InsufficientStock(variant_id)


#widoki katalogu osadzane w liniach koszyka i zamowienia
def product_summary(variant: ProductVariantModel) -> dict:
    product = variant.product
    return {
        "id": str(product.id),
        "title": product.title,
        "description": product.description,
        "image_url": product.image_url,
        "price": to_money(product.price),
    }


def variant_summary(variant: ProductVariantModel) -> dict:
    return {
        "id": str(variant.id),
        "name": variant.attribute,
        "value": variant.value,
        "price": unit_price(variant),
    }
