from sqlalchemy.exc import SQLAlchemyError

from devhunt.models.category import Category
from devhunt.services.errors import BackendError


class CategoryService:
    def __init__(self, session):
        self.session = session

    def get_all(self):
        try:
            return self.session.query(Category).order_by(Category.name).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load categories: {e}") from e

    def get_by_ids(self, ids):
        if not ids:
            return []
        try:
            return self.session.query(Category).filter(Category.id.in_(ids)).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not load categories: {e}") from e

    def search(self, name):
        """Case-insensitive substring search; may return near-matches."""
        try:
            return (
                self.session.query(Category)
                .filter(Category.name.ilike(f"%{name}%"))
                .order_by(Category.name)
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise BackendError(f"Could not search categories: {e}") from e
