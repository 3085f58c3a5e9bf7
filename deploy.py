#!/usr/bin/env python3
"""Command line entry point for deploykit."""

import argparse
import sys

from dotenv import load_dotenv

from deploykit import config
from deploykit.cli import main

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="deploykit CLI")
    parser.add_argument(
        "--devkey",
        default=config.DEFAULT_DEVKEY_PATH,
        help="Path to the signing key file"
    )
    parser.add_argument(
        "--secrets",
        default=config.DEFAULT_SECRETS_PATH,
        help="Path to the JSON file with Infura credentials"
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Load environment variables from this file instead of .env"
    )

    args = parser.parse_args()

    # Load environment variables from .env file if it exists
    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    sys.exit(main(args.devkey, args.secrets))
