#!/usr/bin/env python3
"""
Simulate a Functions request locally.

Runs a source with the configured arguments and secrets and prints the
response bytes, the decoded tuple, captured output and any error.
"""

import argparse
import sys

from mosaic_functions.request_config import RETURN_TYPES, build_request_config
from mosaic_functions.simulate import simulate_script
from mosaic_functions.sources import SOURCES


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Simulate a Functions source locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Work verification with the sample hashes
  python -m mosaic_functions.scripts.simulate_script

  # Certificate extraction
  python -m mosaic_functions.scripts.simulate_script \\
    --source certificate-extraction \\
    --args QmCertificateImageHash
        """
    )

    parser.add_argument("--source", type=str, default="work-verification",
                        choices=sorted(SOURCES.keys()),
                        help="Source to run")
    parser.add_argument("--args", type=str, nargs="*",
                        help="Request arguments (defaults to the sample hashes)")
    parser.add_argument("--return-type", type=str, default="bytes",
                        choices=sorted(RETURN_TYPES.keys()),
                        help="Expected return type")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        request_config = build_request_config(args.source, args.args, args.return_type)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    result = simulate_script(request_config)

    print("=" * 60)
    print(f"SIMULATION: {request_config.source}")
    print("=" * 60)
    print(f"bytes response: {result['response_bytes_hexstring']}")
    print(f"decoded: {result['decoded']}")
    print(f"error: {result['error_string']}")
    print(f"Output: {result['captured_terminal_output']}")

    return 1 if result["error_string"] else 0


if __name__ == "__main__":
    sys.exit(main())
