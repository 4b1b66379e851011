"""Read-only validity and name report for an existing certificate."""

from datetime import UTC, datetime
from pathlib import Path

from cryptography import x509

from .cert_utils import deserialize_certificate, extract_san_dns_names, get_common_name
from .models import CertificateSummary

STATUS_VALID = "VALID"
STATUS_NOT_YET_VALID = "NOT YET VALID"
STATUS_EXPIRED = "EXPIRED"

SEPARATOR = "-" * 50


def load_certificate_file(path: Path) -> x509.Certificate:
    """Load a PEM certificate from disk.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the file is not a PEM certificate
    """
    if not path.is_file():
        raise FileNotFoundError(f"certificate file '{path}' not found")
    return deserialize_certificate(path.read_bytes())


def inspect_certificate(cert: x509.Certificate, now: datetime | None = None) -> CertificateSummary:
    """Summarize CN, validity window, status and SANs.

    SAN entries equal to the CN are left out, the CN is reported as the
    primary name.
    """
    now = now or datetime.now(UTC)
    not_before = cert.not_valid_before_utc
    not_after = cert.not_valid_after_utc

    if now < not_before:
        status = STATUS_NOT_YET_VALID
    elif now > not_after:
        status = STATUS_EXPIRED
    else:
        status = STATUS_VALID

    common_name = get_common_name(cert.subject)
    return CertificateSummary(
        common_name=common_name,
        not_before=not_before,
        not_after=not_after,
        status=status,
        san_names=[name for name in extract_san_dns_names(cert) if name != common_name],
    )


def format_summary(summary: CertificateSummary, path: Path) -> str:
    lines = [
        SEPARATOR,
        f"Certificate Details: {path}",
        SEPARATOR,
        "Validity:",
        f"  From: {summary.not_before.isoformat()}",
        f"  To:   {summary.not_after.isoformat()}",
        f"  (Status: {summary.status})",
        "",
        "Registered Names:",
        f"  [Primary]   {summary.common_name}",
    ]
    lines.extend(f"  [SAN]       {name}" for name in summary.san_names)
    lines.append(SEPARATOR)
    return "\n".join(lines)
