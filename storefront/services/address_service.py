# storefront/services/address_service.py
from typing import Dict, Any
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import AddressNotFound
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADDRESS_FIELDS = ("label", "line1", "line2", "city", "postal", "country", "phone")


class AddressDeduplicator:
    """
    find-or-create adresu wysylki per user.
    Klucz: (user_id, label, line1, city, postal, country) - dokladne dopasowanie.
    Nowy adres jest tylko flushowany, commit robi transakcja zamowienia.
    """

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def resolve(self, user_id: int, fields: Dict[str, Any]) -> AddressModel:
        existing = self.repo.find_matching(user_id, fields)
        if existing:
            logger.info(f"Reusing address {existing.id} for user {user_id}")
            return existing

        address = self.repo.add(
            AddressModel(user_id=user_id, **{k: fields.get(k) for k in ADDRESS_FIELDS})
        )
        logger.info(f"Created address {address.id} for user {user_id}")
        return address

    def get_owned(self, user_id: int, address_id: int) -> AddressModel:
        address = self.repo.get_for_user(user_id, address_id)
        if not address:
            raise AddressNotFound(address_id)
        return address

    def count(self, user_id: int, fields: Dict[str, Any]) -> int:
        return self.repo.count_matching(user_id, fields)

    @staticmethod
    def view(address: AddressModel) -> Dict[str, Any]:
        return {
            "id": str(address.id),
            "label": address.label,
            "line1": address.line1,
            "line2": address.line2,
            "city": address.city,
            "postal": address.postal,
            "country": address.country,
            "phone": address.phone,
        }
