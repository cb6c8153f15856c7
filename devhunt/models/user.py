from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from devhunt import db


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(256))
    is_admin = db.Column(db.Boolean, default=False)

    products = db.relationship("Product", backref="owner", lazy=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def can_edit(self, product):
        return bool(self.is_admin) or product.owner_id == self.id

    def __repr__(self):
        return f"<User {self.username}>"
