#!/usr/bin/env python3
"""Generate a domain's Root CA -> Intermediate CA -> host certificate hierarchy."""

import argparse
import sys
from pathlib import Path

from certgen.lib.ca_manager import CAManager
from certgen.lib.config import CertgenConfig
from certgen.lib.crypto_provider import CryptoProvider
from certgen.lib.errors import CertgenError, MissingHostname
from certgen.lib.host_issuer import HostCertificateIssuer
from certgen.lib.layout import resolve_layout
from certgen.lib.logging_config import LOGGER
from certgen.lib.names import split_alt_names
from certgen.lib.storage import FileSystemStore

EPILOG = """examples:
  certgen -d example.com                       CA infrastructure only
  certgen -d example.com -n www -y             www.example.com
  certgen -d example.com -n "*" -y             *.example.com
  certgen -d example.com -n www -a "api.example.com admin.example.com"
  certgen -d dev.example.com -n www -p example.com
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Certificate generator with Root CA -> Intermediate CA -> host hierarchy",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-d", "--domain", help="Domain (e.g., example.com)")
    parser.add_argument(
        "-n",
        "--hostname",
        help="Hostname (e.g., www, or * for wildcard). Omit to create only the CA structure",
    )
    parser.add_argument(
        "-a",
        "--alt-names",
        help='Alternative DNS names, space-separated (e.g., "api.example.com *")',
    )
    parser.add_argument(
        "-p",
        "--parent-domain",
        help="Reuse the Root and Intermediate CA of an existing domain",
    )
    parser.add_argument("--country", help="Country code override")
    parser.add_argument("--state", help="State/province override")
    parser.add_argument("--city", help="City override")
    parser.add_argument("--org", help="Host certificate organization override")
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Non-interactive mode (use defaults, never prompt)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=Path("."),
        help="Directory holding the domains/ tree (default: current directory)",
    )
    return parser


def build_config(args: argparse.Namespace) -> CertgenConfig:
    """Apply command-line subject overrides on top of the defaults."""
    config = CertgenConfig()
    if args.country:
        config.country = args.country
    if args.state:
        config.state = args.state
    if args.city:
        config.locality = args.city
    if args.org:
        config.host_organization = args.org
    return config


def resolve_domain(args: argparse.Namespace, config: CertgenConfig) -> str:
    if args.domain:
        return args.domain
    if args.yes:
        LOGGER.info("Using default domain: %s", config.default_domain)
        return config.default_domain
    answer = input(
        f"Enter the domain name for the CA organization (default: {config.default_domain}): "
    ).strip()
    return answer or config.default_domain


def resolve_hostname(args: argparse.Namespace) -> str | None:
    if args.hostname:
        return args.hostname
    if args.yes:
        return None
    answer = input("Do you want to generate a host certificate? (y/n): ").strip()
    if answer.lower() != "y":
        return None
    return input("Enter the hostname (example: host01, or * for wildcard): ").strip() or None


def prompt_alt_names() -> list[str]:
    """Ask for alternative DNS names one at a time until an empty line."""
    answer = input("Do you want to add alternative DNS names? (y/n): ").strip()
    if answer.lower() != "y":
        return []

    alt_names: list[str] = []
    while True:
        # DNS.1 is always the primary FQDN
        alt_name = input(
            f"Enter alternative DNS name ({len(alt_names) + 2}) or leave empty to finish: "
        ).strip()
        if not alt_name:
            return alt_names
        alt_names.append(alt_name)


def main(argv: list[str] | None = None) -> int:
    """Generate CA infrastructure and, optionally, a host certificate.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)

    try:
        alt_names = split_alt_names(args.alt_names)
        if args.yes and alt_names and not args.hostname:
            raise MissingHostname(
                "alternative names given without --hostname in non-interactive mode"
            )

        config = build_config(args)
        store = FileSystemStore()
        provider = CryptoProvider()

        domain = resolve_domain(args, config)
        layout = resolve_layout(
            store,
            args.base_dir,
            domain,
            parent_domain=args.parent_domain,
            domains_dir_name=config.domains_dir_name,
        )

        CAManager(config, store, provider).ensure_hierarchy(layout)

        hostname = resolve_hostname(args)
        if hostname and not alt_names and not args.yes:
            alt_names = prompt_alt_names()

        result = HostCertificateIssuer(config, store, provider).issue(layout, hostname, alt_names)

        if result is None:
            if layout.owns_ca:
                LOGGER.info(
                    "CA infrastructure has been successfully created in %s", layout.domain_dir
                )
            else:
                LOGGER.info(
                    "CA infrastructure from parent domain %s will be used for future certificates",
                    layout.parent_domain,
                )
            return 0

        LOGGER.info("Subject alternative names: %s", ", ".join(result.san_names))
        if layout.owns_ca:
            LOGGER.info("All certificates have been generated in %s", layout.domain_dir)
        else:
            LOGGER.info(
                "Certificates in %s are signed by the %s CA hierarchy",
                layout.domain_dir,
                layout.parent_domain,
            )
        return 0

    except CertgenError as e:
        LOGGER.error("Certificate generation failed: %s", e)
        return 1
    except Exception as e:
        LOGGER.error("Unexpected failure: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
