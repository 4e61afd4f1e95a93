"""Variant inventory: fresh reads and the atomic reservation primitive."""

import threading
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.data.database import Base, unit_of_work
from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.domain.errors import InsufficientStock, VariantNotFound
from storefront.services.inventory_service import InventoryService


class TestGetStock:
    def test_returns_stock_and_unit_price(self, db, make_variant):
        variant = make_variant(price="100.00", price_diff="9.95", stock=7)
        info = InventoryService(db).get_stock(variant.id)
        assert info.stock == 7
        assert info.unit_price == Decimal("109.95")

    def test_negative_price_diff(self, db, make_variant):
        variant = make_variant(price="50.00", price_diff="-5.50")
        assert InventoryService(db).get_stock(variant.id).unit_price == Decimal("44.50")

    def test_unknown_variant(self, db):
        with pytest.raises(VariantNotFound):
            InventoryService(db).get_stock(999)

    def test_get_stocks_names_first_missing_variant(self, db, make_variant):
        variant = make_variant()
        with pytest.raises(VariantNotFound) as exc:
            InventoryService(db).get_stocks([variant.id, 998, 999])
        assert exc.value.variant_id == 998
        assert exc.value.message == "Variant 998 not found"


class TestTryReserve:
    def test_decrements_stock(self, db, make_variant, stock_of):
        variant = make_variant(stock=10)
        with unit_of_work(db):
            InventoryService(db).try_reserve(variant.id, 4)
        assert stock_of(variant.id) == 6

    def test_exact_stock_can_be_reserved(self, db, make_variant, stock_of):
        variant = make_variant(stock=3)
        with unit_of_work(db):
            InventoryService(db).try_reserve(variant.id, 3)
        assert stock_of(variant.id) == 0

    def test_rejects_more_than_available(self, db, make_variant, stock_of):
        variant = make_variant(stock=3)
        with pytest.raises(InsufficientStock):
            with unit_of_work(db):
                InventoryService(db).try_reserve(variant.id, 4)
        assert stock_of(variant.id) == 3

    def test_unknown_variant(self, db):
        with pytest.raises(VariantNotFound):
            InventoryService(db).try_reserve(12345, 1)

    def test_failed_reservation_rolls_back_earlier_ones(self, db, make_variant, stock_of):
        first = make_variant(stock=5)
        second = make_variant(stock=1)
        inventory = InventoryService(db)
        with pytest.raises(InsufficientStock):
            with unit_of_work(db):
                inventory.try_reserve(first.id, 5)
                inventory.try_reserve(second.id, 2)
        assert stock_of(first.id) == 5
        assert stock_of(second.id) == 1


class TestConcurrentReservations:
    def test_stock_never_oversold(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'inventory.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        Base.metadata.create_all(engine)
        Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

        with Session() as setup:
            product = ProductModel(title="Mouse", description="", image_url="", price=Decimal("49.50"))
            variant = ProductVariantModel(
                product=product, sku="MOUSE-1", attribute="color", value="Grey", stock=10, price_diff=0
            )
            setup.add(product)
            setup.commit()
            variant_id = variant.id

        results = []
        lock = threading.Lock()
        start = threading.Barrier(8)

        def worker():
            session = Session()
            start.wait()
            try:
                with unit_of_work(session):
                    InventoryService(session).try_reserve(variant_id, 3)
                outcome = 3
            except InsufficientStock:
                outcome = 0
            finally:
                session.close()
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        with Session() as check:
            final = check.get(ProductVariantModel, variant_id).stock

        assert len(results) == 8
        assert sum(results) == 9
        assert final == 10 - sum(results)
        assert final >= 0
        engine.dispose()
