"""Share and export helpers.

Deterministic share text, share-intent URL and export file name for a
comparison. Opening URLs and rendering images is left to the caller.
"""

from __future__ import annotations

import re
from urllib.parse import urlencode, urlsplit, urlunsplit

from ethoscompare.core.models import UserProfile
from ethoscompare.shared.constants import CLIDefaults, ShareConfig

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")


def comparison_url(left_handle: str, right_handle: str, page_url: str = CLIDefaults.SHARE_PAGE_URL) -> str:
    """Link that reopens the comparison of the two handles."""
    scheme, netloc, path, _, _ = urlsplit(page_url)
    query = urlencode({ShareConfig.LEFT_PARAM: left_handle, ShareConfig.RIGHT_PARAM: right_handle})
    return urlunsplit((scheme, netloc, path, query, ""))


def share_text(left: UserProfile, right: UserProfile, page_url: str = CLIDefaults.SHARE_PAGE_URL) -> str:
    return (
        f"Check out this comparison between {left.display_name} (@{left.handle}) "
        f"and {right.display_name} (@{right.handle}) on Ethos!\n\n"
        f"Compare profiles: {comparison_url(left.handle, right.handle, page_url)}"
    )


def share_intent_url(text: str) -> str:
    """Tweet-intent URL prefilled with ``text``."""
    return f"{ShareConfig.INTENT_URL}?{urlencode({'text': text})}"


def export_filename(left_handle: str, right_handle: str) -> str:
    """File name for an exported comparison image.

    Handles are reduced to ASCII letters and digits.
    """
    left = _UNSAFE_FILENAME_CHARS.sub("", left_handle)
    right = _UNSAFE_FILENAME_CHARS.sub("", right_handle)
    return f"{ShareConfig.EXPORT_PREFIX}-{left}-vs-{right}{ShareConfig.EXPORT_EXTENSION}"
