"""
Command-line interface for Layerwatch - Container Layer Vulnerability Lookup.

Looks up the known vulnerabilities of an image on every configured
scanning backend and prints them per backend, as text or JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from constants import DEFAULT_CONFIG_FILE, DEFAULT_HTTP_TIMEOUT, DEFAULT_REGISTRY
from core.config import load_security_config
from core.exceptions import ConfigurationException
from core.scanner_interface import LayerSource, StaticLayerSource
from core.security import Security
from integrations.registry_client import RegistryClient
from utils.formatting import format_backend_report
from utils.image_utils import ImageReference, parse_image_reference

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="layerwatch",
        description="Layerwatch - look up known CVEs of a container image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("image", help="Image reference (e.g., coreos/dex:v2).")
    parser.add_argument("-t", "--tag", default=None, help="Tag, overrides the one in the image reference.")
    parser.add_argument("-c", "--config", type=Path, default=Path(DEFAULT_CONFIG_FILE), help="Backend configuration file.")

    registry_group = parser.add_argument_group("layer options")
    registry_group.add_argument("--registry", default=None, help="Registry URL (default: from image reference, else Docker Hub).")
    registry_group.add_argument("--token", default=None, help="Bearer token for the registry.")
    registry_group.add_argument("--timeout", type=float, default=DEFAULT_HTTP_TIMEOUT, help="Registry request timeout in seconds.")
    registry_group.add_argument(
        "-l", "--layer", dest="layers", action="append", default=None,
        help="Layer digest, base layer first. Repeat for each layer; skips the registry.",
    )

    parser.add_argument("--json", action="store_true", help="Print results as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    return parser.parse_args(args)


def build_layer_source(args: argparse.Namespace, reference: ImageReference) -> LayerSource:
    """Pick fixed digests when given, otherwise the registry."""
    if args.layers:
        return StaticLayerSource(args.layers)

    registry_url = args.registry or reference.registry_url() or DEFAULT_REGISTRY
    return RegistryClient(registry_url, token=args.token, timeout=args.timeout)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        reference = parse_image_reference(args.image)
        config = load_security_config(args.config)
    except (ValueError, ConfigurationException) as e:
        logger.error(str(e))
        return 2

    tag = args.tag or reference.tag
    security = Security(
        reference.repository,
        tag,
        config,
        layer_source=build_layer_source(args, reference),
    )
    if not security.backend_ids:
        logger.warning(f"No security backend is enabled in {args.config}")

    results = security.vulnerabilities()

    if args.json:
        payload = {
            backend_id: [v.to_dict() for v in vulns]
            for backend_id, vulns in results.items()
        }
        print(json.dumps(payload, indent=2))
    else:
        print(format_backend_report(results))

    return 0


if __name__ == "__main__":
    sys.exit(main())
