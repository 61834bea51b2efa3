"""Index template rendering.

The UI's ``index.html`` ships as a template containing two tokens that are
replaced when the page is served:

* ``SERVANT_SWAGGER_UI_SCHEMA`` -> URL path of the schema document
* ``SERVANT_SWAGGER_UI_DIR``    -> directory the UI is mounted under

Values are inserted verbatim, without HTML escaping. Route configuration
validation (see ``docsui.routes``) keeps both values to plain URL segments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

SCHEMA_PLACEHOLDER = "SERVANT_SWAGGER_UI_SCHEMA"
DIR_PLACEHOLDER = "SERVANT_SWAGGER_UI_DIR"

PLACEHOLDERS = (SCHEMA_PLACEHOLDER, DIR_PLACEHOLDER)

_TOKEN_RE = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS))


def render(template: str, dir: str, schema_path: str) -> str:
    """Substitute the schema path and mount directory into ``template``.

    One left-to-right pass: substituted text is never scanned again, so a
    value that happens to contain a token is left as it is.
    """
    values = {SCHEMA_PLACEHOLDER: schema_path, DIR_PLACEHOLDER: dir}
    return _TOKEN_RE.sub(lambda match: values[match.group(0)], template)


def missing_placeholders(template: str) -> list[str]:
    """Return the placeholder tokens that ``template`` does not contain."""
    return [token for token in PLACEHOLDERS if token not in template]


@dataclass(frozen=True)
class IndexTemplate:
    """The UI's index page skeleton, loaded once at startup."""

    text: str

    def render(self, dir: str, schema_path: str) -> str:
        return render(self.text, dir, schema_path)

    def missing_placeholders(self) -> list[str]:
        return missing_placeholders(self.text)
