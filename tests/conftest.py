"""Shared fixtures: an app on in-memory SQLite with seeded reference data."""

from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from config import Config
from devhunt import create_app, db
from devhunt.models import Category, PricingType, Product, User
from devhunt.services.errors import UploadError


class FakeUploader:
    """Records upload calls instead of storing files."""

    def __init__(self):
        self.calls = []
        self.fail = False
        self.on_upload = None

    def upload(self, file, width=None):
        self.calls.append((file.filename, width))
        if self.on_upload is not None:
            self.on_upload(file)
        if self.fail:
            raise UploadError("storage unavailable")
        return f"https://cdn.test/{file.filename}?w={width}"


def make_file(filename="shot.png", content_type="image/png", data=b"\x89PNG fake"):
    return FileStorage(stream=BytesIO(data), filename=filename, content_type=content_type)


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(tmp_path, uploader):
    test_config = type("TestConfig", (Config,), {
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "SITE_URL": "https://devhunt.org",
        "CATEGORIES": ["AI Tools", "Testing", "DevOps", "Databases"],
    })
    app = create_app(test_config, uploader=uploader)

    with app.app_context():
        db.create_all()
        seed()
        yield app
        db.session.remove()
        db.drop_all()


def seed():
    free = PricingType(id=1, title="Free")
    paid = PricingType(id=2, title="Paid")
    ai = Category(id=1, name="AI Tools")
    ai_near = Category(id=2, name="AI Tools for Designers")
    testing = Category(id=3, name="Testing")
    devops = Category(id=4, name="DevOps")

    owner = User(id=1, username="owner")
    owner.set_password("owner-pass")
    other = User(id=2, username="other")
    other.set_password("other-pass")
    admin = User(id=3, username="admin", is_admin=True)
    admin.set_password("admin-pass")

    product = Product(
        id=42,
        name="Dev Hunt",
        slug="dev-hunt",
        slogan="Find the best new DevTools in tech",
        description="A launchpad for dev tools.",
        demo_url="https://devhunt.org",
        github_url="https://github.com/MarsX-dev/devhunt",
        logo_url="l.png",
        asset_urls=["a.png", "b.png"],
        pricing_type=1,
        votes_count=10,
        owner_id=1,
        categories=[ai],
    )

    db.session.add_all([free, paid, ai, ai_near, testing, devops, owner, other, admin, product])
    db.session.commit()


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id):
    with client.session_transaction() as sess:
        sess["_user_id"] = str(user_id)
        sess["_fresh"] = True


@pytest.fixture
def owner_client(client):
    login(client, 1)
    return client


def valid_form(**overrides):
    data = {
        "tool_name": "Dev Hunt Pro",
        "slogan": "Find the best new DevTools in tech",
        "tool_website": "https://devhunt.org",
        "github_repo": "",
        "tool_description": "A launchpad for dev tools.",
        "demo_video": "",
        "pricing_type": "2",
        "categories": ["3", "4"],
    }
    data.update(overrides)
    return data
