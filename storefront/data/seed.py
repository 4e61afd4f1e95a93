# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CATALOGUE = [
    {
        "title": "Fjallraven Backpack",
        "price": "109.95",
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "image_url": "/images/backpack.jpg",
        "variants": [
            {"sku": "BACK-001-BLACK-S", "attribute": "color", "value": "Black", "stock": 10, "price_diff": "0"},
            {"sku": "BACK-001-BLACK-M", "attribute": "color", "value": "Black", "stock": 12, "price_diff": "0"},
        ],
    },
    {
        "title": "Men's Casual Premium Slim Fit T-Shirt",
        "price": "22.30",
        "description": "Slim-fitting style, contrast raglan long sleeve.",
        "image_url": "/images/tshirt_men.jpg",
        "variants": [
            {"sku": "TSHIRT-001-WHITE-M", "attribute": "color", "value": "White", "stock": 20, "price_diff": "0"},
            {"sku": "TSHIRT-001-WHITE-L", "attribute": "size", "value": "L", "stock": 15, "price_diff": "1.50"},
        ],
    },
    {
        "title": "WD 2TB Elements Portable External Hard Drive",
        "price": "64.00",
        "description": "USB 3.0 and USB 2.0 compatibility, fast data transfers.",
        "image_url": "/images/hdd.jpg",
        "variants": [
            {"sku": "HDD-001-2TB", "attribute": "capacity", "value": "2TB", "stock": 20, "price_diff": "0"},
            {"sku": "HDD-001-4TB", "attribute": "capacity", "value": "4TB", "stock": 5, "price_diff": "35.00"},
        ],
    },
]


def seed(db: Session) -> int:
    """Katalog demo. Nie nadpisuje: seeduje tylko pusta baze. Zwraca liczbe dodanych produktow."""
    if db.query(ProductModel).first():
        return 0

    for entry in CATALOGUE:
        product = ProductModel(
            title=entry["title"],
            price=Decimal(entry["price"]),
            description=entry["description"],
            image_url=entry["image_url"],
            variants=[
                ProductVariantModel(
                    sku=v["sku"],
                    attribute=v["attribute"],
                    value=v["value"],
                    stock=v["stock"],
                    price_diff=Decimal(v["price_diff"]),
                )
                for v in entry["variants"]
            ],
        )
        db.add(product)

    db.commit()
    logger.info(f"Seeded {len(CATALOGUE)} products")
    return len(CATALOGUE)


if __name__ == "__main__":
    from storefront.data.database import Base, SessionLocal, engine
    import storefront.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
