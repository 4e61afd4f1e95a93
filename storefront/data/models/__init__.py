#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel, ProductVariantModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.review import ReviewModel

__all__ = [
    "UserModel",
    "ProductModel",
    "ProductVariantModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
    "ReviewModel",
]
