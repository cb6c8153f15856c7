import re

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def create_slug(name):
    """Lowercase, hyphen separated slug: "Dev Hunt!" -> "dev-hunt"."""
    return _NON_ALNUM.sub('-', (name or '').lower()).strip('-')


def normalize_slug(slug):
    """Turn a URL slug back into a comparable name: "ai-tools" -> "ai tools"."""
    return (slug or '').replace('-', ' ').strip().lower()
