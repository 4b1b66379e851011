"""Exceptions raised while building a domain's certificate hierarchy.

Every error is fatal for the invocation that raised it. Scripts catch
CertgenError at main() and exit non-zero.
"""


class CertgenError(Exception):
    """Base class for certificate hierarchy errors."""


class MissingParentCA(CertgenError):
    """Parent domain lacks its directory or complete Root/Intermediate material."""


class MissingRootCA(CertgenError):
    """Intermediate CA requested while the owning Root CA is missing."""


class MissingIntermediateCA(CertgenError):
    """Host certificate requested without a usable Intermediate CA."""


class MissingHostname(CertgenError):
    """Non-interactive run needs a hostname and none was given."""


class SigningFailure(CertgenError):
    """Key generation, CSR creation or signing failed."""


class FileSystemError(CertgenError):
    """Directory or file could not be created, read or written."""
