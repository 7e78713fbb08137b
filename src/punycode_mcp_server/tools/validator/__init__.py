from .fqdn import hostname_check_impl, validate_fqdn

__ALL__ = [
    validate_fqdn,
    hostname_check_impl,
]
