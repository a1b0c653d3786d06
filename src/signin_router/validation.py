"""Email syntax validation."""

from __future__ import annotations

import re

# local part, "@", one or more dot-terminated labels, then a 2-63 char TLD
_EMAIL_RE = re.compile(r".+@([a-zA-Z0-9\-]+\.)+[a-zA-Z0-9]{2,63}")


def is_valid_email(email: str | None) -> bool:
    """Return True if ``email`` looks like an email address.

    Purely syntactic: no DNS or deliverability checks. Whether an account
    exists is for the identity backend to say.
    """
    if not email:
        return False
    return _EMAIL_RE.fullmatch(email) is not None
