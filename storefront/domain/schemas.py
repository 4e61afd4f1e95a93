# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt
from pydantic.alias_generators import to_camel

# identyfikatory to int4 w postgresie
MAX_ID = 2**31 - 1

# kwoty: Decimal w srodku, liczba z 2 miejscami po przecinku w JSON
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Wspolna baza: camelCase na zewnatrz, snake_case w kodzie."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# AUTH
# =====================================================
class GuestTokenOut(CamelModel):
    token: str


# =====================================================
# CART
# =====================================================
class CartItemIn(CamelModel):
    """Dodanie wariantu do koszyka."""

    variant_id: StrictInt = Field(..., gt=0, le=MAX_ID, description="ID wariantu (musi byc > 0)")
    quantity: StrictInt = Field(..., description="Ilosc (dodatnia liczba calkowita)")


class CartQuantityIn(CamelModel):
    quantity: StrictInt = Field(..., description="Nowa ilosc (dodatnia liczba calkowita)")


class ProductSummaryOut(CamelModel):
    id: str
    title: str
    description: str
    image_url: str
    price: Money


class VariantSummaryOut(CamelModel):
    id: str
    name: str
    value: str
    price: Money


class CartLineOut(CamelModel):
    id: str
    variant_id: str
    quantity: int
    product: ProductSummaryOut
    variant: VariantSummaryOut


# =====================================================
# ORDERS
# =====================================================
class OrderItemIn(CamelModel):
    variant_id: StrictInt = Field(..., gt=0, le=MAX_ID)
    quantity: StrictInt = Field(..., gt=0)


class ShippingIn(CamelModel):
    label: str = Field(..., min_length=1)
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    postal: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    phone: Optional[str] = None


class PaymentIn(CamelModel):
    """Dane platnosci - zapisujemy tylko metode, karta nie jest przetwarzana."""

    method: str = Field(..., min_length=1)
    card_number: Optional[str] = None
    expiry_date: Optional[str] = None
    cvv: Optional[str] = None


class OrderIn(CamelModel):
    """Zamowienie z jawna lista pozycji (niezalezne od koszyka)."""

    items: List[OrderItemIn]
    shipping: ShippingIn
    payment: PaymentIn


class CartOrderIn(CamelModel):
    """Zamowienie z zawartosci koszyka na istniejacy adres."""

    address_id: StrictInt = Field(..., gt=0, le=MAX_ID)
    payment_method: Optional[str] = None


class AddressOut(CamelModel):
    id: str
    label: str
    line1: str
    line2: Optional[str] = None
    city: str
    postal: str
    country: str
    phone: Optional[str] = None


class OrderItemOut(CamelModel):
    id: str
    product_id: str
    variant_id: str
    quantity: int
    unit_price: Money
    line_total: Money
    product: ProductSummaryOut
    variant: VariantSummaryOut


class OrderOut(CamelModel):
    id: str
    status: str
    total: Money
    items: List[OrderItemOut]
    shipping_address: Optional[AddressOut] = None
    payment_method: str
    tracking_number: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# =====================================================
# REVIEWS
# =====================================================
class ReviewIn(CamelModel):
    rating: StrictInt = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=200)
    comment: str = Field(..., min_length=1, max_length=5000)
    images: List[str] = Field(default_factory=list, max_length=10)


class ReviewOut(CamelModel):
    id: str
    product_id: str
    user_id: str
    user_name: str
    user_avatar: Optional[str] = None
    rating: int
    title: str
    comment: str
    images: List[str]
    likes: int
    dislikes: int
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class ReviewListOut(CamelModel):
    reviews: List[ReviewOut]
    total: int
    page: int
    limit: int
    total_pages: int
    average_rating: float
    rating_distribution: Dict[str, int]
