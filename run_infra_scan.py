#!/usr/bin/env python3
"""
Command-line interface for running the Infrastructure Manifest Scanner.

It requires cloud credentials to be configured: AWS via the AWS CLI,
environment variables or IAM roles, GCP via Application Default Credentials.

Usage:
    python run_infra_scan.py --manifest infra-manifest.json
    python run_infra_scan.py --manifest s3://my-bucket/infra-manifest.toml --account prod
    python run_infra_scan.py --manifest resources.txt --output-format json --log-level DEBUG

Exit codes:
    0  every resource exists
    1  one or more resources are missing
    2  the manifest or configuration is invalid
    3  one or more checks failed, or the scan itself failed
"""

import argparse
import sys
from typing import List, Optional

from src.config import DEFAULT_AWS_REGION, Config
from src.infra_scan import ManifestError, format_scan, run_scan
from src.infra_scan.output import OUTPUT_FORMATS
from src.infra_scan.types import InfraScanResult
from src.utils import setup_logging

EXIT_SUCCESS = 0
EXIT_VIOLATIONS_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


def exit_code_for(result: InfraScanResult) -> int:
    """Maps a scan result to the process exit code. Errors outrank missing resources."""
    if result.summary.errors:
        return EXIT_RUNTIME_ERROR
    if result.summary.missing:
        return EXIT_VIOLATIONS_FOUND
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that the resources declared in an infrastructure manifest exist",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_infra_scan.py --manifest infra-manifest.json
  python run_infra_scan.py --manifest infra-manifest.toml --account aws:123456789012 --concurrency 20
        """
    )

    parser.add_argument(
        "--manifest",
        required=True,
        help="Path to the manifest (.json, .toml or .txt), local or s3://bucket/key"
    )

    parser.add_argument(
        "--account",
        default=None,
        help="Only scan the account with this key (e.g. aws:123456789012) or alias"
    )

    parser.add_argument(
        "--concurrency",
        type=int,
        default=10,
        help="Maximum number of resource checks in flight (default: 10)"
    )

    parser.add_argument(
        "--region",
        default=DEFAULT_AWS_REGION,
        help=f"AWS region for global services such as IAM and S3 (default: {DEFAULT_AWS_REGION})"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--max-retries",
        type=int,
        default=3,
        help="Maximum number of retries for AWS API calls (default: 3)"
    )

    parser.add_argument(
        "--timeout-seconds",
        type=int,
        default=30,
        help="Timeout for AWS API calls in seconds (default: 30)"
    )

    parser.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format for the scan report (default: text)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the command-line scanner."""
    args = build_parser().parse_args(argv)

    # Set up logging
    logger = setup_logging(args.log_level)
    logger.info("Starting infrastructure scan from command line")

    if args.concurrency < 1:
        print("ERROR: --concurrency must be at least 1", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    config = Config(
        manifest_path=args.manifest,
        aws_region=args.region,
        log_level=args.log_level,
        concurrency=args.concurrency,
        account=args.account,
        max_retries=args.max_retries,
        timeout_seconds=args.timeout_seconds,
    )

    try:
        result = run_scan(config)
    except ManifestError as e:
        logger.error(f"Invalid manifest: {str(e)}")
        print(f"ERROR: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        logger.error(f"Error running infrastructure scan: {str(e)}")
        print(f"ERROR: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)

    print(format_scan(result, args.output_format))

    exit_code = exit_code_for(result)
    if exit_code == EXIT_SUCCESS:
        logger.info("No drift detected. Exiting with code 0")
    else:
        logger.warning(f"Drift detected! Exiting with code {exit_code}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
