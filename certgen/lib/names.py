"""Hostname, wildcard and SAN normalization."""

WILDCARD = "*"
WILDCARD_PREFIX = "*."
WILDCARD_STEM_PREFIX = "wildcard."


def format_wildcard_name(name: str, domain: str) -> str:
    """Normalize a wildcard token against ``domain``.

    ``*`` becomes ``*.<domain>`` and ``*.something`` is kept as given. A
    marker glued to text (``*api``) is coerced to ``*.<domain>`` and the
    suffix is dropped. Non-wildcard names are returned unchanged.
    """
    if name == WILDCARD:
        return f"{WILDCARD_PREFIX}{domain}"
    if name.startswith(WILDCARD_PREFIX):
        return name
    if name.startswith(WILDCARD):
        return f"{WILDCARD_PREFIX}{domain}"
    return name


def build_fqdn(token: str, domain: str) -> str:
    """Turn a hostname token into the certificate's primary FQDN.

    Wildcards follow format_wildcard_name. A dotted token is already an
    FQDN. A bare label is joined to ``domain``.
    """
    if token.startswith(WILDCARD):
        return format_wildcard_name(token, domain)
    if "." in token:
        return token
    return f"{token}.{domain}"


def cert_filename_stem(fqdn: str) -> str:
    """Filesystem-safe stem: a leading ``*.`` becomes ``wildcard.``."""
    if fqdn.startswith(WILDCARD_PREFIX):
        return WILDCARD_STEM_PREFIX + fqdn[len(WILDCARD_PREFIX) :]
    return fqdn


def build_san_list(fqdn: str, alt_names: list[str] | None, domain: str) -> list[str]:
    """Primary FQDN first, then each alternate name in the order given.

    Duplicates and names equal to the primary are kept as-is.
    """
    san_names = [fqdn]
    for alt_name in alt_names or []:
        san_names.append(format_wildcard_name(alt_name, domain))
    return san_names


def split_alt_names(raw: str | None) -> list[str]:
    """Split a space-separated alternate names argument into tokens."""
    if not raw:
        return []
    return raw.split()
