from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)  # cena bazowa

    variants = relationship(
        "ProductVariantModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductVariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    sku = Column(String, nullable=False, unique=True)

    attribute = Column(String, nullable=False)  # np. color, size
    value = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    price_diff = Column(Numeric(10, 2), nullable=False, default=0)

    product = relationship("ProductModel", back_populates="variants", lazy="joined")

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_variant_stock_non_negative"),)
