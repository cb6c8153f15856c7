from datetime import datetime, timezone

from devhunt import db
from devhunt.models.category import product_category_product


def _utcnow():
    return datetime.now(timezone.utc)


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    slogan = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)

    demo_url = db.Column(db.String(500), nullable=True)
    github_url = db.Column(db.String(500), nullable=True)
    demo_video_url = db.Column(db.String(500), nullable=True)
    logo_url = db.Column(db.String(500), nullable=True)

    # Ordered list of screenshot URLs
    asset_urls = db.Column(db.JSON, nullable=False, default=list)

    pricing_type = db.Column(db.Integer, db.ForeignKey("product_pricing_types.id"), nullable=True)
    votes_count = db.Column(db.Integer, nullable=False, default=0)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    product_pricing_type = db.relationship("PricingType", lazy=True)
    categories = db.relationship(
        "Category",
        secondary=product_category_product,
        lazy=True,
        order_by="Category.name",
    )

    @property
    def tags(self):
        """Pricing type title (defaulting to "Free") followed by category names."""
        pricing = self.product_pricing_type.title if self.product_pricing_type else None
        return [pricing or "Free"] + [c.name for c in self.categories]

    def __repr__(self):
        return f"<Product {self.slug}>"
