# storefront/repos/cart_repo.py
from datetime import datetime

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.identity import Identity, UserIdentity


def _owner_filter(owner: Identity):
    if isinstance(owner, UserIdentity):
        return CartItemModel.user_id == owner.id
    return CartItemModel.guest_id == owner.id


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_lines(self, owner: Identity) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel).where(_owner_filter(owner)).order_by(CartItemModel.id)
            ).unique().scalars().all()
        )

    def get_line(self, owner: Identity, line_id: int) -> CartItemModel | None:
        #wlasnosc sprawdzana w zapytaniu - cudza linia == brak linii
        return self.db.execute(
            select(CartItemModel).where(CartItemModel.id == line_id, _owner_filter(owner))
        ).unique().scalar_one_or_none()

    def get_line_for_variant(self, owner: Identity, variant_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.variant_id == variant_id,
                _owner_filter(owner),
            )
        ).unique().scalar_one_or_none()

    def add_line(self, line: CartItemModel) -> CartItemModel:
        self.db.add(line)
        self.db.commit()
        self.db.refresh(line)
        return line

    def delete_line(self, line: CartItemModel):
        self.db.delete(line)
        self.db.commit()

    def delete_lines(self, owner: Identity, commit: bool = True) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(_owner_filter(owner))
            .execution_options(synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return result.rowcount

    def delete_stale_guest_lines(self, older_than: datetime) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.guest_id.is_not(None),
                CartItemModel.updated_at < older_than,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
