import re
from dataclasses import dataclass
from typing import Optional, Pattern

URL_PATTERN = re.compile(r'(https?://)?([a-z0-9-]+\.)+[a-z]{2,}(/\S*)?', re.IGNORECASE)


@dataclass(frozen=True)
class FieldRule:
    name: str
    message: str
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Pattern] = None
    # Validated against a runtime catalog passed to validate_fields()
    from_catalog: bool = False

    def check(self, value, catalog=None):
        """Return True when ``value`` satisfies the rule."""
        if value is None or value == '':
            return not self.required
        if self.from_catalog:
            return catalog is not None and str(value) in {str(c) for c in catalog}
        value = str(value)
        if self.min_length is not None and len(value) < self.min_length:
            return False
        if self.max_length is not None and len(value) > self.max_length:
            return False
        if self.pattern is not None and not self.pattern.fullmatch(value):
            return False
        return True


EDIT_LISTING_RULES = (
    FieldRule('tool_name', 'Please enter your tool name', required=True, min_length=3),
    FieldRule('slogan', 'Please enter your tool slogan', required=True, min_length=20),
    FieldRule('tool_website', 'Please enter your tool website URL', required=True, pattern=URL_PATTERN),
    FieldRule('github_repo', 'Please enter a valid GitHub repo URL', pattern=URL_PATTERN),
    FieldRule('tool_description', 'Please enter your tool description', required=True, max_length=220),
    FieldRule('demo_video', 'Please enter a valid demo video URL', pattern=URL_PATTERN),
    FieldRule('pricing_type', 'Please select your tool pricing type', required=True, from_catalog=True),
)


def validate_fields(data, rules=EDIT_LISTING_RULES, catalogs=None):
    """Map each failing field name to its message."""
    catalogs = catalogs or {}
    errors = {}
    for rule in rules:
        if not rule.check(data.get(rule.name), catalogs.get(rule.name)):
            errors[rule.name] = rule.message
    return errors
