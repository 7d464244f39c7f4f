"""Issue body layout for submitted feedback."""

from ghfeedback import vote_codec

CONTACT_EMAIL_HEADER = "**Contact Email:**"


def build_issue_body(
    description: str,
    device_info: str | None = None,
    contact_email: str | None = None,
) -> str:
    """Description followed by the optional device and contact sections.

    The vote marker is not included; add it with vote_codec.encode.
    """
    device = ""
    if device_info is not None:
        device = f"{vote_codec.SECTION_SEPARATOR}{vote_codec.DEVICE_INFO_HEADER}\n{device_info}"
    contact = ""
    if contact_email is not None:
        contact = f"{CONTACT_EMAIL_HEADER}\n{contact_email}"
    return f"{description}\n{device}\n\n{contact}"


def build_feedback_body(
    description: str,
    device_info: str | None = None,
    contact_email: str | None = None,
    votes: int = 0,
) -> str:
    """Full body as sent to GitHub, ending with the vote marker."""
    return vote_codec.encode(build_issue_body(description, device_info, contact_email), votes)
