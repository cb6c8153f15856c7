from devhunt import db


class PricingType(db.Model):
    __tablename__ = "product_pricing_types"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f"<PricingType {self.title}>"
