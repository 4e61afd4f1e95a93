import itertools
import os
import uuid
from decimal import Decimal

# konfiguracja musi byc ustawiona zanim zaimportujemy storefront.*
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["ORDER_WEBHOOK_URL"] = ""
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import create_app
from storefront.data.database import Base, get_db
from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.data.models.user import UserModel
from storefront.domain.identity import GuestIdentity, UserIdentity
from storefront.services.identity_service import IdentityResolver

SHIPPING = {
    "label": "Ev",
    "line1": "Ataturk Caddesi No:123",
    "line2": "Daire 5",
    "city": "Istanbul",
    "postal": "34000",
    "country": "Turkiye",
    "phone": "+90 555 123 4567",
}


class RecordingNotifications:
    """Zamiast Celery - zapamietuje wywolania."""

    def __init__(self):
        self.sent = []

    def order_placed(self, user_id, order_id):
        self.sent.append((user_id, order_id))
        return True


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def make_user(db):
    counter = itertools.count(1)

    def _make(name="Test User"):
        n = next(counter)
        user = UserModel(email=f"user{n}-{uuid.uuid4().hex[:6]}@example.com", name=name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_variant(db):
    def _make(
        price="109.95",
        stock=20,
        price_diff="0",
        variant_id=None,
        title="Fjallraven Backpack",
        attribute="color",
        value="Black",
    ):
        product = ProductModel(
            title=title,
            description="Your perfect pack for everyday use.",
            image_url="/images/backpack.jpg",
            price=Decimal(price),
        )
        extra = {"id": variant_id} if variant_id is not None else {}
        variant = ProductVariantModel(
            product=product,
            sku=f"SKU-{uuid.uuid4().hex[:10]}",
            attribute=attribute,
            value=value,
            stock=stock,
            price_diff=Decimal(price_diff),
            **extra,
        )
        db.add(product)
        db.commit()
        db.refresh(variant)
        return variant

    return _make


@pytest.fixture()
def stock_of(db):
    def _stock(variant_id):
        #odczyt kolumny omija identity map
        return db.execute(
            select(ProductVariantModel.stock).where(ProductVariantModel.id == variant_id)
        ).scalar_one()

    return _stock


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def user_identity(user):
    return UserIdentity(user.id)


@pytest.fixture()
def guest_identity():
    return GuestIdentity(uuid.uuid4().hex)


@pytest.fixture()
def resolver():
    return IdentityResolver(secret="test-secret")


@pytest.fixture()
def notifications():
    return RecordingNotifications()


@pytest.fixture()
def app(session_factory, resolver, notifications):
    app = create_app(
        identity_resolver=resolver,
        notifications=notifications,
        rate_limit_enabled=False,
    )

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def auth_headers(resolver):
    def _headers(user):
        return {"Authorization": f"Bearer {resolver.issue_user_token(user.id)}"}

    return _headers


@pytest.fixture()
def guest_headers(resolver):
    return {"Authorization": f"Bearer {resolver.issue_guest_token()}"}
