"""Result models for certificate hierarchy operations."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class TierState(Enum):
    """Whether a CA tier's key and certificate are both on disk."""

    MISSING = "missing"
    PRESENT = "present"


class Tier(Enum):
    ROOT = "root"
    INTERMEDIATE = "intermediate"


@dataclass
class TierResult:
    """Outcome of ensuring a single CA tier.

    created is False when the tier was already present and left untouched.
    """

    tier: Tier
    key_path: Path
    cert_path: Path
    created: bool


@dataclass
class HierarchyResult:
    """Result from ensuring Root and Intermediate CA for a domain.

    root and intermediate are None when the domain borrows its CA material
    from a parent domain and the manager was bypassed.
    """

    domain: str
    root: TierResult | None
    intermediate: TierResult | None
    chain_path: Path | None
    chain_created: bool = False


@dataclass
class HostCertResult:
    """Result from host certificate issuance.

    Contains the normalized names and file paths of every written artifact.
    """

    fqdn: str
    stem: str
    san_names: list[str]
    key_path: Path
    csr_path: Path
    cert_path: Path
    fullchain_path: Path


@dataclass
class CertificateSummary:
    """Read-only view of a certificate for the inspection report."""

    common_name: str
    not_before: datetime
    not_after: datetime
    status: str
    san_names: list[str] = field(default_factory=list)
