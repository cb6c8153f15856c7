from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from devhunt.models.category import Category, product_category_product
from devhunt.models.product import Product
from devhunt.services.errors import BackendError
from devhunt.utils.slugs import create_slug


EDITABLE_FIELDS = (
    "name",
    "slogan",
    "description",
    "demo_url",
    "github_url",
    "demo_video_url",
    "logo_url",
    "pricing_type",
    "asset_urls",
)


class ProductsService:
    """Queries and updates for the products table."""

    # Field selectors: loader options applied to get_products queries
    PRODUCT_SELECT = ()
    EXTENDED_PRODUCT_SELECT_WITH_CATEGORIES = (
        selectinload(Product.product_pricing_type),
        selectinload(Product.categories),
    )

    def __init__(self, session):
        self.session = session

    def get_by_id(self, product_id):
        try:
            return self.session.get(Product, product_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load product {product_id}: {e}") from e

    def get_by_slug(self, slug):
        try:
            return (
                self.session.query(Product)
                .options(*self.EXTENDED_PRODUCT_SELECT_WITH_CATEGORIES)
                .filter(Product.slug == slug)
                .first()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load product '{slug}': {e}") from e

    def get_products(self, sort_field="votes_count", ascending=False, page_size=50, page=1,
                     category_id=None, field_selector=PRODUCT_SELECT):
        """Return ``(items, total)`` for one page of products.

        ``category_id`` restricts the result to products tagged with that
        category; ``field_selector`` is a tuple of loader options deciding
        which relations are fetched along with each product.
        """
        column = getattr(Product, sort_field)
        order = column.asc() if ascending else column.desc()

        query = self.session.query(Product)
        if category_id is not None:
            query = query.join(
                product_category_product,
                product_category_product.c.product_id == Product.id,
            ).filter(product_category_product.c.category_id == category_id)

        try:
            total = query.count()
            items = (
                query.options(*field_selector)
                .order_by(order, Product.id.asc())
                .offset((max(page, 1) - 1) * page_size)
                .limit(page_size)
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load products: {e}") from e
        return items, total

    def update(self, product_id, fields, category_ids):
        """Overwrite the product's fields and replace its categories.

        The slug is regenerated from the name. Returns the updated product,
        or None when it does not exist.
        """
        try:
            product = self.session.get(Product, product_id)
            if product is None:
                return None

            for key, value in fields.items():
                if key in EDITABLE_FIELDS:
                    setattr(product, key, value)
            product.slug = self._unique_slug(product)

            if category_ids:
                product.categories = (
                    self.session.query(Category).filter(Category.id.in_(category_ids)).all()
                )
            else:
                product.categories = []

            self.session.commit()
            return product
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not update product {product_id}: {e}") from e

    def _unique_slug(self, product):
        slug = create_slug(product.name) or str(product.id)
        taken = (
            self.session.query(Product.id)
            .filter(Product.slug == slug, Product.id != product.id)
            .first()
        )
        if taken:
            slug = f"{slug}-{product.id}"
        return slug
