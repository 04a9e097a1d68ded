"""
Email address validation.

This is a permissive syntactic check of the shape local-part@domain.tld,
not RFC 5322 validation. Known limitations: quoted local parts, IP-literal
domains, single-character TLDs and domains with more than three labels
after the first are all rejected.
"""

import re
from typing import Iterable, Optional

# local part: no leading dot, no "..", no trailing dot
# domain: one word segment, then one or two dot labels, no trailing dot
_EMAIL_PATTERN = re.compile(
    r'^(?![^@]*\.\.)((?!\.)[\w\-_.]*[\w\-])(@\w+)(\.\w+(\.\w+)?[^.\W])\Z',
    re.ASCII
)


def validate_email(address: str) -> bool:
    """
    Check whether address looks like local-part@domain.tld.

    Args:
        address: Candidate email address

    Returns:
        True if the address matches, False otherwise (never raises)

    Example:
        >>> validate_email("john.doe@example.com")
        True
        >>> validate_email("john..doe@example.com")
        False
    """
    if not isinstance(address, str):
        return False
    return _EMAIL_PATTERN.match(address) is not None


def find_invalid_address(addresses: Iterable[str]) -> Optional[str]:
    """Return the first address failing validation, in scan order."""
    for address in addresses:
        if not validate_email(address):
            return address
    return None
