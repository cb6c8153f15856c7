from devhunt.models.user import User
from devhunt.models.category import Category, product_category_product
from devhunt.models.pricing_type import PricingType
from devhunt.models.product import Product

__all__ = ["User", "Category", "PricingType", "Product", "product_category_product"]
