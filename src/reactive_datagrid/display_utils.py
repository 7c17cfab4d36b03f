"""Default column titles derived from record keys."""

import re

_ACRONYMS = {
    "id", "url", "uri", "api", "iso", "uuid", "ip", "sku", "vat", "gdp",
}

# word boundaries: separators, lower->Upper, and ACRONYM->Word ("HTTPCode")
_SEPARATORS = re.compile(r"[_.\-\s]+")
_CAMEL = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(key: str) -> list[str]:
    words = []
    for part in _SEPARATORS.split(key):
        words.extend(w for w in _CAMEL.split(part) if w)
    return words


def prettify_name(name: str) -> str:
    """Turn a record key into a Title Case column title.

    Handles snake_case, dotted paths, kebab-case and camelCase; known
    acronyms are upper-cased.

    Examples::

        prettify_name("country_id")    # -> "Country ID"
        prettify_name("address.city")  # -> "Address City"
        prettify_name("isoCode")       # -> "ISO Code"
        prettify_name("HTTPStatus")    # -> "HTTP Status"
    """
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS or w.isupper() else w.capitalize()
        for w in split_words(name)
    )
