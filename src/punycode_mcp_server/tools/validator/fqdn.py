import re
from typing import Tuple

import dns.exception
import dns.name

from punycode_mcp_server.exceptions import PunycodeError, handle_codec_error
from punycode_mcp_server.labels import LABEL_SEPARATOR, encode_label, idna_encode
from punycode_mcp_server.typedefs import LabelReport, ToolResult

# RFC label regex:
# - Letters, digits, hyphens
# - Cannot start or end with hyphen
# - Length 1–63
LABEL_REGEX = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")

MAX_FQDN_LENGTH = 253


async def validate_fqdn(domain: str) -> Tuple[bool, str]:
    """
    Validate a Fully Qualified Domain Name (FQDN) according to DNS RFC rules.
    Covers RFC 1035 and RFC 1123 on the ACE form produced by ``idna_encode``.

    Returns:
        Tuple[bool, str]: (is_valid, message) where is_valid is True if the FQDN
        is valid and message describes the result or error.
    """

    if not isinstance(domain, str) or not domain:
        return False, "Domain must be a non-empty string"

    # Remove a trailing dot if present (FQDN canonical form)
    if domain.endswith("."):
        domain = domain[:-1]

    # Convert IDN to ASCII (punycode). If this fails → invalid.
    try:
        domain_ascii = idna_encode(domain)
    except PunycodeError as e:
        return False, f"Invalid IDN encoding: {str(e)}"

    # Entire FQDN length (in ASCII) must be <= 253 chars
    if len(domain_ascii) > MAX_FQDN_LENGTH:
        description = (
            f"FQDN length {len(domain_ascii)} exceeds maximum of {MAX_FQDN_LENGTH} characters"
        )
        return False, description

    labels = domain_ascii.split(LABEL_SEPARATOR)

    # No empty labels allowed (e.g. "example..com")
    if any(label == "" for label in labels):
        description = (
            "FQDN contains empty labels (consecutive dots or trailing dot after removal)"
        )
        return False, description

    # Wire-format limits are left to dnspython
    try:
        dns.name.from_text(domain_ascii)
    except dns.exception.DNSException as e:
        return False, handle_codec_error(e)

    for label in labels:
        if not LABEL_REGEX.match(label):
            description = (
                f"Label '{label}' is invalid (must be 1-63 chars, "
                "alphanumeric/hyphen, not start/end with hyphen)"
            )
            return False, description

    return True, "Valid FQDN"


async def hostname_check_impl(hostname: str) -> ToolResult:
    """Convert a hostname to ACE form and report on every label.

    Args:
        hostname (str): Unicode or ACE hostname to inspect.

    Returns:
        ToolResult: Per-label conversion report together with the FQDN
        validation verdict, or error details if a label cannot be converted.
    """
    hostname = hostname.strip()
    reports: list[LabelReport] = []
    for index, label in enumerate(hostname.rstrip(LABEL_SEPARATOR).split(LABEL_SEPARATOR)):
        try:
            ace = encode_label(label)
        except PunycodeError as e:
            return ToolResult(
                success=False,
                error=handle_codec_error(e),
                details={"label": label, "index": index},
            )
        reports.append(LabelReport(label=label, ace=ace, encoded=ace != label))

    is_valid, message = await validate_fqdn(hostname)
    return ToolResult(
        success=True,
        output={
            "hostname": hostname,
            "ace": LABEL_SEPARATOR.join(report["ace"] for report in reports),
            "labels": reports,
            "valid": is_valid,
            "message": message,
        },
    )
