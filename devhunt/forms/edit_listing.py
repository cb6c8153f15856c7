"""State and actions behind the "Edit Launch" page.

The page keeps a per-session draft (uploaded-but-unsaved screenshots, logo,
selected categories, typed values and errors). ``EditListingForm`` wraps
that draft together with the services it talks to, so each route only has
to build the form, call one action and persist the draft again.
"""
import enum
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from devhunt.forms.rules import validate_fields
from devhunt.services.errors import BackendError, UploadError
from devhunt.utils.file_rules import is_image

logger = logging.getLogger(__name__)

SCREENSHOTS_ERROR = 'Please choose some screenshots'
LOGO_ERROR = 'Please choose product logo'

# Typed values are kept in the cookie session; longer input is clipped
DRAFT_VALUE_LIMIT = 300


@dataclass
class EditDraft:
    logo_url: str = ''
    asset_urls: List[str] = field(default_factory=list)
    category_ids: List[int] = field(default_factory=list)
    values: Dict[str, object] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


class LoadStatus(enum.Enum):
    SUCCESS = 'success'
    NOT_FOUND = 'not_found'
    ERROR = 'error'


class UploadStatus(enum.Enum):
    UPLOADED = 'uploaded'
    IGNORED = 'ignored'
    FAILED = 'failed'


class SubmitStatus(enum.Enum):
    UPDATED = 'updated'
    INVALID = 'invalid'
    NOT_FOUND = 'not_found'
    ERROR = 'error'


@dataclass
class LoadResult:
    status: LoadStatus
    product: Optional[object] = None
    values: Dict[str, object] = field(default_factory=dict)
    message: str = ''


@dataclass
class SubmitResult:
    status: SubmitStatus
    product: Optional[object] = None
    errors: Dict[str, str] = field(default_factory=dict)
    message: str = ''


def form_values(product):
    """Form field values prefilled from a product record."""
    return {
        'tool_name': product.name or '',
        'tool_website': product.demo_url or '',
        'tool_description': product.description or '',
        'slogan': product.slogan or '',
        'pricing_type': product.pricing_type,
        'github_repo': product.github_url or '',
        'demo_video': product.demo_video_url or '',
    }


class EditListingForm:

    def __init__(self, product_id, products, pricing_types, categories, uploader,
                 draft=None, max_screenshots=5, screenshot_width=512, logo_width=220):
        self.product_id = product_id
        self.products = products
        self.pricing_types_service = pricing_types
        self.categories_service = categories
        self.uploader = uploader
        self.has_draft = draft is not None
        self.draft = draft if draft is not None else EditDraft()
        self.max_screenshots = max_screenshots
        self.screenshot_width = screenshot_width
        self.logo_width = logo_width

        self.pricing_types = []
        self.categories = []

        # Guards for the duration of one request; never stored in the draft
        self.images_loading = False
        self.logo_loading = False
        self.updating = False

    def load(self, keep_draft=False):
        """Fetch the product plus the catalogs.

        The draft is rebuilt from the product unless ``keep_draft`` is set and
        a draft was handed in (the page is coming back from an upload).
        """
        try:
            product = self.products.get_by_id(self.product_id)
            self.load_catalogs()
        except BackendError as e:
            logger.error("Loading product %s failed: %s", self.product_id, e)
            return LoadResult(LoadStatus.ERROR, message=str(e))

        if product is None:
            return LoadResult(LoadStatus.NOT_FOUND)

        if keep_draft and self.has_draft:
            values = self.draft.values or form_values(product)
        else:
            self.draft = EditDraft(
                logo_url=product.logo_url or '',
                asset_urls=list(product.asset_urls or []),
                category_ids=[c.id for c in product.categories],
                values=form_values(product),
            )
            self.has_draft = True
            values = self.draft.values
        return LoadResult(LoadStatus.SUCCESS, product=product, values=values)

    def load_catalogs(self):
        self.pricing_types = self.pricing_types_service.get_all()
        self.categories = self.categories_service.get_all()

    @property
    def selected_categories(self):
        selected = set(self.draft.category_ids)
        return [c for c in self.categories if c.id in selected]

    def upload_screenshot(self, file):
        if not file or not is_image(file.mimetype):
            return UploadStatus.IGNORED
        if len(self.draft.asset_urls) >= self.max_screenshots:
            return UploadStatus.IGNORED

        self.images_loading = True
        try:
            url = self.uploader.upload(file, self.screenshot_width)
        except UploadError as e:
            logger.warning("Screenshot upload failed for product %s: %s", self.product_id, e)
            self.draft.errors['screenshots'] = f'Upload failed: {e}'
            return UploadStatus.FAILED
        finally:
            self.images_loading = False

        self.draft.asset_urls.append(url)
        self.draft.errors.pop('screenshots', None)
        return UploadStatus.UPLOADED

    def upload_logo(self, file):
        if not file or not is_image(file.mimetype):
            return UploadStatus.IGNORED

        self.logo_loading = True
        try:
            url = self.uploader.upload(file, self.logo_width)
        except UploadError as e:
            logger.warning("Logo upload failed for product %s: %s", self.product_id, e)
            self.draft.errors['logo'] = f'Upload failed: {e}'
            return UploadStatus.FAILED
        finally:
            self.logo_loading = False

        self.draft.logo_url = url
        self.draft.errors.pop('logo', None)
        return UploadStatus.UPLOADED

    def remove_screenshot(self, index):
        if 0 <= index < len(self.draft.asset_urls):
            del self.draft.asset_urls[index]

    def validate_media(self):
        self.draft.errors.pop('screenshots', None)
        self.draft.errors.pop('logo', None)
        if not self.draft.asset_urls:
            self.draft.errors['screenshots'] = SCREENSHOTS_ERROR
        if not self.draft.logo_url:
            self.draft.errors['logo'] = LOGO_ERROR
        return 'screenshots' not in self.draft.errors and 'logo' not in self.draft.errors

    def validate_fields(self, data):
        catalogs = {'pricing_type': [p.id for p in self.pricing_types]}
        return validate_fields(data, catalogs=catalogs)

    def submit(self, data):
        """Validate ``data`` and the media, then issue the update."""
        try:
            if not self.pricing_types:
                self.load_catalogs()
        except BackendError as e:
            return SubmitResult(SubmitStatus.ERROR, message=str(e))

        self.remember(data)

        field_errors = self.validate_fields(data)
        media_ok = self.validate_media()
        for name in list(self.draft.errors):
            if name not in ('screenshots', 'logo'):
                del self.draft.errors[name]
        self.draft.errors.update(field_errors)
        if field_errors or not media_ok:
            return SubmitResult(SubmitStatus.INVALID, errors=dict(self.draft.errors))

        fields = {
            'asset_urls': list(self.draft.asset_urls),
            'name': data.get('tool_name'),
            'demo_url': data.get('tool_website'),
            'github_url': data.get('github_repo') or None,
            'pricing_type': int(data.get('pricing_type')),
            'slogan': data.get('slogan'),
            'description': data.get('tool_description'),
            'logo_url': self.draft.logo_url,
            'demo_video_url': data.get('demo_video') or None,
        }
        category_ids = [c.id for c in self.selected_categories]

        self.updating = True
        try:
            product = self.products.update(self.product_id, fields, category_ids)
        except BackendError as e:
            logger.error("Updating product %s failed: %s", self.product_id, e)
            return SubmitResult(SubmitStatus.ERROR, message=str(e))
        finally:
            self.updating = False

        if product is None:
            return SubmitResult(SubmitStatus.NOT_FOUND)
        logger.info("Product %s updated, slug=%s", self.product_id, product.slug)
        return SubmitResult(SubmitStatus.UPDATED, product=product)

    def remember(self, data):
        """Keep what the user typed, clipped, plus the chosen categories."""
        self.draft.values = {
            k: v[:DRAFT_VALUE_LIMIT] if isinstance(v, str) else v
            for k, v in data.items() if k != 'categories'
        }
        self.draft.category_ids = self.select_categories(data.get('categories') or [])

    def select_categories(self, raw_ids):
        """Keep the ids of known categories, in the order given."""
        known = {c.id for c in self.categories}
        ids = []
        for raw in raw_ids:
            try:
                value = int(raw)
            except (TypeError, ValueError):
                continue
            if value in known and value not in ids:
                ids.append(value)
        return ids
