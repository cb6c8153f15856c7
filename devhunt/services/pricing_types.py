from sqlalchemy.exc import SQLAlchemyError

from devhunt.models.pricing_type import PricingType
from devhunt.services.errors import BackendError


class ProductPricingTypesService:
    def __init__(self, session):
        self.session = session

    def get_all(self):
        try:
            return self.session.query(PricingType).order_by(PricingType.id).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load pricing types: {e}") from e
