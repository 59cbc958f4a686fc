"""Text normalization applied to raw calendar documents before parsing."""

import re

LINE_ENDING_RE = re.compile(r"\r\n?")

# A GMT-named zone is a fixed UTC offset; rewriting it to a UTC literal keeps
# the grammar parser from treating it as an unknown (floating) zone.
GMT_TZID_RE = re.compile(r";TZID=GMT:(.*)")

WEBCAL_SCHEME_RE = re.compile(r"^webcal:")


def normalize_content(content: str) -> str:
    """Normalize line endings and GMT timezone parameters.

    Args:
        content: Raw calendar text as fetched

    Returns:
        New text with ``\\n`` line endings and ``;TZID=GMT:<value>`` rewritten
        to ``:<value>Z``
    """
    content = LINE_ENDING_RE.sub("\n", content)
    return GMT_TZID_RE.sub(r":\1Z", content)


def normalize_url_scheme(url: str) -> str:
    """Rewrite a ``webcal:`` URL to ``http:``."""
    return WEBCAL_SCHEME_RE.sub("http:", url)
