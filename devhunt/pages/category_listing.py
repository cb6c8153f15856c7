from dataclasses import dataclass, field
from typing import List, Optional, Union

from devhunt.utils.slugs import normalize_slug


@dataclass(frozen=True)
class CategoryFound:
    category: object


@dataclass(frozen=True)
class CategoryNotFound:
    name: Optional[str] = None


CategoryLookup = Union[CategoryFound, CategoryNotFound]


@dataclass
class CategoryListing:
    name: str
    category: object
    products: List[object] = field(default_factory=list)
    total: int = 0


def resolve_category_name(slug, names):
    """Canonical category name for ``slug``, or None."""
    wanted = normalize_slug(slug)
    if not wanted:
        return None
    for name in names:
        if normalize_slug(name) == wanted:
            return name
    return None


def select_exact_match(results, name):
    wanted = name.lower()
    for category in results:
        if category.name.lower() == wanted:
            return CategoryFound(category)
    return CategoryNotFound(name)


def lookup_category(category_service, name):
    results = category_service.search(name)
    if not results:
        return CategoryNotFound(name)
    return select_exact_match(results, name)


def load_category_listing(slug, names, category_service, products_service, page_size=50):
    """Resolve ``slug`` and fetch its top voted products.

    Returns None when the slug, or the category behind it, is unknown.
    """
    name = resolve_category_name(slug, names)
    if name is None:
        return None

    lookup = lookup_category(category_service, name)
    if isinstance(lookup, CategoryNotFound):
        return None

    products, total = products_service.get_products(
        'votes_count',
        False,
        page_size,
        1,
        lookup.category.id,
        products_service.EXTENDED_PRODUCT_SELECT_WITH_CATEGORIES,
    )
    return CategoryListing(name=name, category=lookup.category, products=products, total=total)
