import os

import pytest
from sqlalchemy.exc import OperationalError

from conftest import make_file
from devhunt import db
from devhunt.models import Product
from devhunt.services.errors import BackendError, UploadError
from devhunt.services.file_uploader import FileUploader
from devhunt.services.pricing_types import ProductPricingTypesService
from devhunt.services.products import ProductsService
from devhunt.utils.links import external_url
from devhunt.utils.slugs import create_slug, normalize_slug


class TestProductsService:

    def test_get_by_id(self, app):
        product = ProductsService(db.session).get_by_id(42)
        assert product.slug == "dev-hunt"
        assert ProductsService(db.session).get_by_id(1000) is None

    def test_get_by_slug_loads_relations(self, app):
        product = ProductsService(db.session).get_by_slug("dev-hunt")
        assert product.tags == ["Free", "AI Tools"]

    def test_update_missing_product_returns_none(self, app):
        assert ProductsService(db.session).update(1000, {"name": "x"}, []) is None

    def test_update_ignores_unknown_fields(self, app):
        product = ProductsService(db.session).update(42, {"votes_count": 9999, "slogan": "New"}, [])
        assert product.votes_count == 10
        assert product.slogan == "New"
        assert product.categories == []

    def test_update_keeps_slug_unique(self, app):
        db.session.add(Product(name="Taken", slug="taken", asset_urls=[]))
        db.session.commit()

        product = ProductsService(db.session).update(42, {"name": "Taken"}, [])

        assert product.slug == "taken-42"

    def test_database_errors_become_backend_errors(self, app, monkeypatch):
        service = ProductsService(db.session)

        def boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(db.session, "get", boom)
        with pytest.raises(BackendError):
            service.get_by_id(42)

    def test_get_products_pagination(self, app):
        items, total = ProductsService(db.session).get_products(page_size=1, page=2)
        assert total == 1
        assert items == []


def test_pricing_types_in_catalog_order(app):
    assert [p.title for p in ProductPricingTypesService(db.session).get_all()] == ["Free", "Paid"]


class TestFileUploader:

    def test_stores_file_and_returns_url(self, tmp_path):
        uploader = FileUploader(str(tmp_path), "/static/uploads/")

        url = uploader.upload(make_file("Shot One.png"), 512)

        assert url.startswith("/static/uploads/")
        assert url.endswith(".png?w=512")
        stored = os.listdir(tmp_path)
        assert len(stored) == 1

    def test_extension_from_mimetype_when_name_has_none(self, tmp_path):
        uploader = FileUploader(str(tmp_path), "/u")
        url = uploader.upload(make_file("blob", "image/png"))
        assert url.endswith(".png")

    def test_empty_file_is_rejected(self, tmp_path):
        uploader = FileUploader(str(tmp_path), "/u")
        with pytest.raises(UploadError):
            uploader.upload(make_file("empty.png", data=b""), 220)
        assert os.listdir(tmp_path) == []

    @pytest.mark.parametrize("name, mimetype", [
        ("evil.svg", "image/svg+xml"),
        ("evil.png", "image/svg+xml"),
        ("page.html", "text/html"),
    ])
    def test_non_raster_image_is_rejected(self, tmp_path, name, mimetype):
        uploader = FileUploader(str(tmp_path), "/u")
        with pytest.raises(UploadError):
            uploader.upload(make_file(name, mimetype, b"<svg onload=\"alert(1)\"/>"), 512)
        assert os.listdir(tmp_path) == []


@pytest.mark.parametrize("name, slug", [
    ("Dev Hunt", "dev-hunt"),
    ("  AI -- Tools!! ", "ai-tools"),
    ("C++ Linter 2.0", "c-linter-2-0"),
])
def test_create_slug(name, slug):
    assert create_slug(name) == slug


def test_normalize_slug():
    assert normalize_slug("AI-Tools") == "ai tools"


@pytest.mark.parametrize("stored, href", [
    ("devhunt.org", "https://devhunt.org"),
    ("github.com/MarsX-dev/devhunt", "https://github.com/MarsX-dev/devhunt"),
    ("https://devhunt.org", "https://devhunt.org"),
    ("HTTP://devhunt.org/x", "HTTP://devhunt.org/x"),
    (" devhunt.org ", "https://devhunt.org"),
    ("", ""),
    (None, ""),
])
def test_external_url(stored, href):
    assert external_url(stored) == href
