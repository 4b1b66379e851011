#!/usr/bin/env python3
"""Print validity dates, status, CN and SANs of a certificate."""

import argparse
import sys
from pathlib import Path

from certgen.lib.cert_inspector import format_summary, inspect_certificate, load_certificate_file
from certgen.lib.logging_config import LOGGER


def main(argv: list[str] | None = None) -> int:
    """Inspect a PEM certificate.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Show certificate validity and registered names")
    parser.add_argument(
        "cert_file",
        nargs="?",
        type=Path,
        help="Certificate file (prompted when omitted)",
    )
    args = parser.parse_args(argv)

    cert_file = args.cert_file
    if cert_file is None:
        cert_file = Path(
            input("Enter the path to the certificate file (e.g., ./host.lan.crt): ").strip()
        )

    try:
        summary = inspect_certificate(load_certificate_file(cert_file))
    except FileNotFoundError as e:
        LOGGER.error("Certificate not found: %s", e)
        return 1
    except ValueError as e:
        LOGGER.error("Certificate could not be parsed: %s", e)
        return 1

    print(format_summary(summary, cert_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
