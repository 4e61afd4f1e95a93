from sqlalchemy import Column, Integer, String, ForeignKey, Index

from storefront.data.database import Base


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    label = Column(String, nullable=False)
    line1 = Column(String, nullable=False)
    line2 = Column(String, nullable=True)
    city = Column(String, nullable=False)
    postal = Column(String, nullable=False)
    country = Column(String, nullable=False)
    phone = Column(String, nullable=True)

    __table_args__ = (
        Index("ix_address_dedup", "user_id", "label", "line1", "city", "postal", "country"),
    )
