#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.customer import CustomerModel
from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.supplier import SupplierModel
from storefront.data.models.store import StoreModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.payment_method import PaymentMethodModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel
from storefront.data.models.shipment import ShipmentModel
from storefront.data.models.shipment_event import ShipmentEventModel
from storefront.data.models.inventory import InventoryModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.promotion import PromotionModel

__all__ = [
    "CustomerModel",
    "CategoryModel",
    "ProductModel",
    "SupplierModel",
    "StoreModel",
    "CartItemModel",
    "PaymentMethodModel",
    "OrderModel",
    "OrderDetailModel",
    "ShipmentModel",
    "ShipmentEventModel",
    "InventoryModel",
    "ReviewModel",
    "PromotionModel",
]
