#!/usr/bin/env python3
"""Renew a Namecheap SSL certificate: create, check expiry, renew, activate with a new CSR."""

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from ssl_operations.lib.config import load_config
from ssl_operations.lib.exceptions import ConfigError
from ssl_operations.lib.logging_config import LOGGER
from ssl_operations.lib.models import RenewalResult
from ssl_operations.lib.namecheap_client import NamecheapSSLClient
from ssl_operations.lib.renewal import run_renewal

DEFAULT_OUTPUT_DIR = Path("ssl_operations/output")


def write_artifacts(result: RenewalResult, output_dir: Path) -> Path:
    """Write the CSR, private key and run summary for the renewed certificate.

    Creates:
        {output_dir}/{certificate_id}/csr.pem
        {output_dir}/{certificate_id}/private.key (mode 0600)
        {output_dir}/{certificate_id}/result.json

    Args:
        result: Renewal result holding the generated CSR bundle
        output_dir: Base directory for artifacts

    Returns:
        Directory the artifacts were written to
    """
    target_dir = output_dir / (result.certificate_id or "unknown")
    target_dir.mkdir(parents=True, exist_ok=True)

    if result.csr is not None:
        (target_dir / "csr.pem").write_text(result.csr.csr_pem)
        key_path = target_dir / "private.key"
        key_path.touch(mode=0o600, exist_ok=True)
        key_path.chmod(0o600)
        key_path.write_text(result.csr.private_key_pem)

    (target_dir / "result.json").write_text(json.dumps(result.to_dict(), indent=2))
    return target_dir


def main() -> int:
    """Run one certificate renewal.

    Returns:
        Exit code (0 when activated or not yet eligible, 1 on failure)
    """
    parser = argparse.ArgumentParser(
        description="Renew a Namecheap SSL certificate and activate it with a fresh CSR"
    )
    parser.add_argument(
        "--certificate-id",
        default=None,
        help="Existing certificate ID to renew (skips certificate creation)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory for CSR and key artifacts (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--production",
        action="store_true",
        help="Use the production API endpoint instead of the sandbox",
    )
    args = parser.parse_args()

    try:
        config = load_config()
    except ConfigError as e:
        LOGGER.error("Invalid configuration: %s", e)
        return 1

    if args.production:
        config = dataclasses.replace(config, sandbox=False)

    try:
        client = NamecheapSSLClient(config)
        result = run_renewal(client, config, certificate_id=args.certificate_id)

        if result.csr is not None:
            artifact_dir = write_artifacts(result, args.output_dir)
            LOGGER.info("Artifacts written to %s", artifact_dir)

        LOGGER.info("Renewal run complete:")
        LOGGER.info("  Stage: %s", result.stage.value)
        LOGGER.info("  Certificate: %s", result.certificate_id)

        if not result.succeeded:
            LOGGER.warning("Renewal stopped at step: %s", result.failed_step or result.stage.value)
            return 1

        return 0

    except Exception as e:
        LOGGER.error("Renewal failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
