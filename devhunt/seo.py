from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from devhunt.pages.category_listing import resolve_category_name

NOT_FOUND_TITLE = '404: This page could not be found.'


@dataclass(frozen=True)
class PageMetadata:
    title: str
    description: str = ''
    canonical: Optional[str] = None
    og_title: Optional[str] = None
    twitter_title: Optional[str] = None

    @classmethod
    def not_found(cls):
        return cls(title=NOT_FOUND_TITLE, description='')


def category_metadata(slug, names, site_url):
    name = resolve_category_name(slug, names)
    if name is None:
        return PageMetadata.not_found()

    title = f'Best {name} Tools'
    return PageMetadata(
        title=title,
        canonical=urljoin(site_url.rstrip('/') + '/', f'tools/{slug}'),
        og_title=title,
        twitter_title=title,
    )
