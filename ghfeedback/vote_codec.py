"""Vote counter stored inside the issue body.

GitHub issues have no vote field, so the count lives in a marker line at the
end of the body:

    <description>

    ---
    👍 Votes: 3

The same module strips the internal sections (votes, device information,
legacy mobile footer) for display.
"""

import re

VOTE_PREFIX = "👍 Votes:"
SECTION_SEPARATOR = "\n\n---\n"

DEVICE_INFO_HEADER = "**Device Information:**"
LEGACY_MOBILE_FOOTER = "\n\n*Submitted via mobile app*"

_VOTE_RE = re.compile(r"👍 Votes: (\d+)")

# Everything from the earliest of these onward is internal and not shown to users.
_INTERNAL_SECTION_MARKERS = (
    SECTION_SEPARATOR + VOTE_PREFIX,
    SECTION_SEPARATOR + DEVICE_INFO_HEADER,
    LEGACY_MOBILE_FOOTER,
)


def vote_marker(count: int) -> str:
    """Return the marker text for a count, e.g. ``👍 Votes: 4``."""
    return f"{VOTE_PREFIX} {count}"


def encode(body: str | None, count: int) -> str:
    """Write ``count`` into ``body`` and return the new body.

    Replaces the first existing marker in place; otherwise appends
    ``\\n\\n---\\n👍 Votes: N``. An empty or missing body becomes the bare
    suffix.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"Vote count must be non-negative, got {count}")
    marker = vote_marker(count)
    if not body:
        return SECTION_SEPARATOR + marker
    if VOTE_PREFIX in body and _VOTE_RE.search(body):
        return _VOTE_RE.sub(lambda _m: marker, body, count=1)
    return body + SECTION_SEPARATOR + marker


def decode(body: str | None) -> int:
    """Return the vote count stored in ``body``, or 0 when there is none."""
    if not body:
        return 0
    m = _VOTE_RE.search(body)
    if not m:
        return 0
    try:
        return int(m.group(1))
    except ValueError:
        # int() refuses digit strings past the interpreter's conversion limit
        return 0


def strip_internal_sections(body: str) -> str:
    """Cut ``body`` at the first internal section marker and trim whitespace."""
    cut = len(body)
    for marker in _INTERNAL_SECTION_MARKERS:
        pos = body.find(marker)
        if pos != -1 and pos < cut:
            cut = pos
    return body[:cut].strip()
