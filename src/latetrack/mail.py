"""Hand-off of late notices to the desktop mail client."""

import logging
import webbrowser
from urllib.parse import quote

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "Late Notice"


def build_mailto_uri(prof_email: str, body: str, subject: str = EMAIL_SUBJECT) -> str:
    """Build a mailto: URI with percent-encoded subject and body."""
    return f"mailto:{prof_email}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"


def open_mail_client(uri: str) -> bool:
    """
    Open a mailto: URI with the platform's default handler.

    Delivery is not confirmed; the return value only says whether a handler
    was launched.
    """
    logger.info(f"Opening mail client for {uri.split('?', 1)[0]}")
    opened = webbrowser.open(uri)
    if not opened:
        logger.warning("No mail handler could be launched")
    return opened
