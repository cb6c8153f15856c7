import re

_SCHEME = re.compile(r'^[a-z][a-z0-9+.-]*://', re.IGNORECASE)


def external_url(url):
    """Absolute link for a stored URL; "devhunt.org" -> "https://devhunt.org"."""
    if not url:
        return ''
    url = url.strip()
    if _SCHEME.match(url):
        return url
    return 'https://' + url.lstrip('/')
