# storefront/repos/variant_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductVariantModel


class VariantRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_variant(self, variant_id: int) -> ProductVariantModel | None:
        #populate_existing - zawsze swiezy odczyt stanu z bazy, nie z identity map
        return self.db.execute(
            select(ProductVariantModel)
            .where(ProductVariantModel.id == variant_id)
            .execution_options(populate_existing=True)
        ).unique().scalar_one_or_none()

    def get_variants(self, variant_ids) -> dict[int, ProductVariantModel]:
        ids = set(variant_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductVariantModel)
            .where(ProductVariantModel.id.in_(ids))
            .execution_options(populate_existing=True)
        ).unique().scalars().all()
        return {v.id: v for v in rows}

    def exists(self, variant_id: int) -> bool:
        return self.db.execute(
            select(ProductVariantModel.id).where(ProductVariantModel.id == variant_id)
        ).first() is not None

    def decrement_stock(self, variant_id: int, quantity: int) -> int:
        """
        Warunkowy UPDATE: stock = stock - q WHERE id = :id AND stock >= q.
        Zwraca rowcount (1 = zarezerwowano, 0 = brak wariantu albo za maly stan).
        Bez commita - transakcja nalezy do wywolujacego.
        """
        result = self.db.execute(
            update(ProductVariantModel)
            .where(
                ProductVariantModel.id == variant_id,
                ProductVariantModel.stock >= quantity,
            )
            .values(stock=ProductVariantModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
