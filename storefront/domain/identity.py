# storefront/domain/identity.py
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class UserIdentity:
    """Zarejestrowany uzytkownik (trwaly wiersz w users)."""

    id: int

    @property
    def is_guest(self) -> bool:
        return False


@dataclass(frozen=True)
class GuestIdentity:
    """Gosc - id niesione w tokenie, bez wiersza w bazie."""

    id: str

    @property
    def is_guest(self) -> bool:
        return True


Identity = Union[UserIdentity, GuestIdentity]


def owner_columns(owner: Identity) -> dict:
    """Kolumny wlasciciela linii koszyka - dokladnie jedna jest ustawiona."""
    if isinstance(owner, UserIdentity):
        return {"user_id": owner.id, "guest_id": None}
    if isinstance(owner, GuestIdentity):
        return {"user_id": None, "guest_id": owner.id}
    raise TypeError(f"Unsupported identity: {owner!r}")
