"""Per-label IDNA conversion of hostnames.

Hostnames are split on ``.`` and every label is converted on its own. Labels
that only use characters allowed in a URL host are left as they are; all other
labels are lowercased, Punycode encoded and tagged with the ACE prefix
``xn--``. Decoding strips the prefix from tagged labels and decodes them.

Empty labels (``a..b``, a trailing dot) are kept as empty strings. No IDNA2008
or UTS #46 mapping or validation takes place here.
"""

import string

from punycode_mcp_server.codec import DELIMITER, decode, encode
from punycode_mcp_server.exceptions import LabelConversionError, PunycodeError

ACE_PREFIX = "xn--"
LABEL_SEPARATOR = "."

# Characters a URL host may carry without percent-encoding (RFC 3986 unreserved
# and sub-delims, plus ':' and the IPv6 literal brackets).
HOST_ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits + "-._~!$&'()*+,;=:[]")


def needs_encoding(label: str) -> bool:
    """Return True if the label has a character outside the allowed host set."""
    return any(char not in HOST_ALLOWED_CHARS for char in label)


def encode_label(label: str) -> str:
    """Convert a single label to its ACE form, or return it unchanged."""
    if not needs_encoding(label):
        return label
    lowered = label.lower()
    encoded = encode(lowered)
    if encoded == lowered:
        # all-ASCII label, give it the trailing delimiter so decode_label restores it
        encoded += DELIMITER
    return ACE_PREFIX + encoded


def decode_label(label: str) -> str:
    """Convert a single ``xn--`` label back to Unicode, or return it unchanged."""
    if not label.startswith(ACE_PREFIX):
        return label
    return decode(label[len(ACE_PREFIX):])


def _convert(hostname: str, convert_label) -> str:
    labels = hostname.split(LABEL_SEPARATOR)
    converted = []
    for index, label in enumerate(labels):
        try:
            converted.append(convert_label(label))
        except PunycodeError as e:
            raise LabelConversionError(label, index, str(e)) from e
    return LABEL_SEPARATOR.join(converted)


def idna_encode(hostname: str) -> str:
    """Convert a Unicode hostname to its ASCII Compatible Encoding.

    Args:
        hostname: Hostname such as ``"münchen.de"``.

    Returns:
        str: The hostname with every non-host label replaced by its
            ``xn--`` form, e.g. ``"xn--mnchen-3ya.de"``.

    Raises:
        LabelConversionError: If one of the labels cannot be encoded.
    """
    return _convert(hostname, encode_label)


def idna_decode(hostname: str) -> str:
    """Convert an ACE hostname back to Unicode.

    Args:
        hostname: Hostname such as ``"xn--mnchen-3ya.de"``.

    Returns:
        str: The hostname with every ``xn--`` label decoded.

    Raises:
        LabelConversionError: If one of the ``xn--`` labels cannot be decoded.
    """
    return _convert(hostname, decode_label)
