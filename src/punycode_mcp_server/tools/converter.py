from fastmcp.utilities.logging import get_logger

from punycode_mcp_server.codec import decode, encode
from punycode_mcp_server.exceptions import PunycodeError, handle_codec_error
from punycode_mcp_server.labels import idna_decode, idna_encode
from punycode_mcp_server.typedefs import ToolResult

logger = get_logger(__name__)


async def punycode_encode_impl(text: str) -> ToolResult:
    """Encode a Unicode string to raw Punycode (no ACE prefix).

    Args:
        text (str): The string to encode. Whitespace is significant.

    Returns:
        ToolResult: Punycode string or error details.
    """
    try:
        punycode = encode(text)
    except PunycodeError as e:
        logger.debug("Punycode encoding of %r failed: %s", text, e)
        return ToolResult(success=False, error=handle_codec_error(e))
    return ToolResult(success=True, output={"input": text, "output": punycode})


async def punycode_decode_impl(text: str) -> ToolResult:
    """Decode a raw Punycode string (no ACE prefix) to Unicode.

    Args:
        text (str): The Punycode string to decode.

    Returns:
        ToolResult: Decoded string or error details.
    """
    try:
        decoded = decode(text)
    except PunycodeError as e:
        logger.debug("Punycode decoding of %r failed: %s", text, e)
        return ToolResult(success=False, error=handle_codec_error(e))
    return ToolResult(success=True, output={"input": text, "output": decoded})


async def idna_encode_impl(hostname: str) -> ToolResult:
    """Perform Unicode IDN domain name conversion into punycode ASCII format.

    Args:
        hostname (str): The domain name to convert to punycode.

    Returns:
        ToolResult: Punycode domain name or error details.
    """
    hostname = hostname.strip()
    try:
        ace = idna_encode(hostname)
    except PunycodeError as e:
        logger.debug("IDNA encoding of %r failed: %s", hostname, e)
        return ToolResult(
            success=False,
            error=handle_codec_error(e),
            details={"label": getattr(e, "label", None), "index": getattr(e, "index", None)},
        )
    return ToolResult(success=True, output={"domain": hostname, "punycode": ace})


async def idna_decode_impl(hostname: str) -> ToolResult:
    """Convert a punycode ASCII domain name back to its Unicode form.

    Args:
        hostname (str): The ACE domain name to convert.

    Returns:
        ToolResult: Unicode domain name or error details.
    """
    hostname = hostname.strip()
    try:
        unicode_name = idna_decode(hostname)
    except PunycodeError as e:
        logger.debug("IDNA decoding of %r failed: %s", hostname, e)
        return ToolResult(
            success=False,
            error=handle_codec_error(e),
            details={"label": getattr(e, "label", None), "index": getattr(e, "index", None)},
        )
    return ToolResult(success=True, output={"punycode": hostname, "domain": unicode_name})
