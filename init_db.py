# init_db.py
import os

from devhunt import create_app, db
from devhunt.models.category import Category
from devhunt.models.pricing_type import PricingType
from devhunt.models.user import User

PRICING_TYPES = ["Free", "Paid", "Freemium"]

app = create_app()

with app.app_context():
    db.create_all()

    for title in PRICING_TYPES:
        if not PricingType.query.filter_by(title=title).first():
            db.session.add(PricingType(title=title))
            print(f"✅ Pricing type created: {title}")

    for name in app.config["CATEGORIES"]:
        if not Category.query.filter_by(name=name).first():
            db.session.add(Category(name=name))
            print(f"✅ Category created: {name}")

    admin = User.query.filter_by(username='admin').first()
    if not admin:
        password = os.environ.get('ADMIN_PASSWORD', 'admin123')
        admin_user = User(username='admin', is_admin=True)
        admin_user.set_password(password)
        db.session.add(admin_user)
        print("✅ Admin user created: admin")
    else:
        print("⚠️ Admin user already exists")

    db.session.commit()
    print("🎯 Database ready")
