"""Per-domain directory layout and parent-domain CA sharing."""

from dataclasses import dataclass
from pathlib import Path

from .errors import MissingParentCA
from .logging_config import LOGGER
from .models import TierState
from .storage import FileSystemStore, tier_state

CA_DIR_NAME = "ca"
INTERMEDIATE_DIR_NAME = "intermediate"
CERTS_DIR_NAME = "certs"
LOCK_FILE_NAME = ".certgen.lock"


@dataclass
class DomainLayout:
    """Resolved directories for one domain.

    With a parent domain, ca_dir and intermediate_dir point into the
    parent's tree and only certs_dir belongs to this domain.
    """

    domain: str
    domain_dir: Path
    ca_dir: Path
    intermediate_dir: Path
    certs_dir: Path
    parent_domain: str | None = None

    @property
    def owns_ca(self) -> bool:
        return self.parent_domain is None

    @property
    def root_key_path(self) -> Path:
        return self.ca_dir / "ca.key"

    @property
    def root_cert_path(self) -> Path:
        return self.ca_dir / "ca.crt"

    @property
    def intermediate_key_path(self) -> Path:
        return self.intermediate_dir / "intermediate.key"

    @property
    def intermediate_csr_path(self) -> Path:
        return self.intermediate_dir / "intermediate.csr"

    @property
    def intermediate_cert_path(self) -> Path:
        return self.intermediate_dir / "intermediate.crt"

    @property
    def chain_path(self) -> Path:
        return self.intermediate_dir / "ca-chain.crt"

    @property
    def lock_path(self) -> Path:
        """Lock file of the domain that owns the CA material."""
        return self.ca_dir.parent / LOCK_FILE_NAME

    def host_key_path(self, stem: str) -> Path:
        return self.certs_dir / f"{stem}.key"

    def host_csr_path(self, stem: str) -> Path:
        return self.certs_dir / f"{stem}.csr"

    def host_cert_path(self, stem: str) -> Path:
        return self.certs_dir / f"{stem}.crt"

    def host_fullchain_path(self, stem: str) -> Path:
        return self.certs_dir / f"{stem}-fullchain.crt"


def domains_root(base_dir: Path, domains_dir_name: str = "domains") -> Path:
    return base_dir / domains_dir_name


def resolve_layout(
    store: FileSystemStore,
    base_dir: Path,
    domain: str,
    parent_domain: str | None = None,
    domains_dir_name: str = "domains",
) -> DomainLayout:
    """Resolve and create the directories for ``domain``.

    Args:
        store: Storage backend used for presence checks and mkdir
        base_dir: Directory holding the ``domains/`` tree
        domain: Domain whose certs/ directory is resolved
        parent_domain: Optional domain whose ca/ and intermediate/ are reused
        domains_dir_name: Name of the tree under base_dir

    Returns:
        DomainLayout with all directories in place

    Raises:
        MissingParentCA: If the parent directory or any parent CA file is absent.
            Nothing is created under the child in that case.
    """
    root = domains_root(base_dir, domains_dir_name)
    domain_dir = root / domain
    certs_dir = domain_dir / CERTS_DIR_NAME

    if parent_domain:
        parent_dir = root / parent_domain
        layout = DomainLayout(
            domain=domain,
            domain_dir=domain_dir,
            ca_dir=parent_dir / CA_DIR_NAME,
            intermediate_dir=parent_dir / INTERMEDIATE_DIR_NAME,
            certs_dir=certs_dir,
            parent_domain=parent_domain,
        )
        _check_parent_ca(store, layout, parent_dir)
        LOGGER.info("Using parent domain %s CA directory: %s", parent_domain, layout.ca_dir)
        LOGGER.info(
            "Using parent domain %s intermediate CA directory: %s",
            parent_domain,
            layout.intermediate_dir,
        )
        store.mkdir(certs_dir)
        return layout

    layout = DomainLayout(
        domain=domain,
        domain_dir=domain_dir,
        ca_dir=domain_dir / CA_DIR_NAME,
        intermediate_dir=domain_dir / INTERMEDIATE_DIR_NAME,
        certs_dir=certs_dir,
    )
    store.mkdir(certs_dir)
    store.mkdir(layout.ca_dir)
    store.mkdir(layout.intermediate_dir)
    LOGGER.info("Using domain %s, certificates stored in: %s", domain, certs_dir)
    return layout


def _check_parent_ca(store: FileSystemStore, layout: DomainLayout, parent_dir: Path) -> None:
    if not store.is_dir(parent_dir):
        raise MissingParentCA(f"parent domain directory {parent_dir} does not exist")
    if tier_state(store, layout.root_key_path, layout.root_cert_path) is TierState.MISSING:
        raise MissingParentCA(
            f"parent domain {layout.parent_domain} does not have valid CA certificates"
        )
    if (
        tier_state(store, layout.intermediate_key_path, layout.intermediate_cert_path)
        is TierState.MISSING
    ):
        raise MissingParentCA(
            f"parent domain {layout.parent_domain} does not have valid intermediate CA certificates"
        )
