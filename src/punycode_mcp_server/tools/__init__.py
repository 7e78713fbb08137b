"""Tools related submodule to keep all things tool related in one place."""

from .converter import (
    idna_decode_impl,
    idna_encode_impl,
    punycode_decode_impl,
    punycode_encode_impl,
)
from .validator import hostname_check_impl, validate_fqdn

__ALL__ = [
    punycode_encode_impl,
    punycode_decode_impl,
    idna_encode_impl,
    idna_decode_impl,
    hostname_check_impl,
    validate_fqdn,
]
