# storefront/repos/address_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel

# pola klucza deduplikacji (poza user_id)
DEDUP_FIELDS = ("label", "line1", "city", "postal", "country")


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def _match(self, user_id: int, fields: dict):
        return [AddressModel.user_id == user_id] + [
            getattr(AddressModel, name) == fields[name] for name in DEDUP_FIELDS
        ]

    def find_matching(self, user_id: int, fields: dict) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(*self._match(user_id, fields)).order_by(AddressModel.id).limit(1)
        ).scalar_one_or_none()

    def count_matching(self, user_id: int, fields: dict) -> int:
        return self.db.execute(
            select(func.count(AddressModel.id)).where(*self._match(user_id, fields))
        ).scalar_one()

    def get_for_user(self, user_id: int, address_id: int) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(AddressModel.id == address_id, AddressModel.user_id == user_id)
        ).scalar_one_or_none()

    def add(self, address: AddressModel) -> AddressModel:
        #flush zamiast commit - adres zapisuje sie razem z zamowieniem
        self.db.add(address)
        self.db.flush()
        return address
