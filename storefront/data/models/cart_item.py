from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)

    #wlasciciel: albo user albo guest, nigdy oba
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    guest_id = Column(String(64), nullable=True, index=True)

    variant_id = Column(Integer, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    variant = relationship("ProductVariantModel", lazy="joined")

    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL AND guest_id IS NOT NULL) OR (user_id IS NOT NULL AND guest_id IS NULL)",
            name="ck_cart_item_single_owner",
        ),
        CheckConstraint("quantity > 0", name="ck_cart_item_quantity_positive"),
        UniqueConstraint("user_id", "variant_id", name="u_cart_user_variant"),
        UniqueConstraint("guest_id", "variant_id", name="u_cart_guest_variant"),
    )
