#!/usr/bin/env python3
"""
S3 Request Primitives

Run this script to plan multipart uploads or inspect SigV4 canonical forms.

Usage:
    python run.py plan 1GiB                     # Choose a part size
    python run.py plan -1 -s 16MiB              # Unknown object size
    python run.py -j plan 12MiB -s 5MiB         # JSON output
    python run.py canonical -H "Host: x" -q a=1 # Canonical headers/query
"""

import sys
from s3request.cli import main

if __name__ == "__main__":
    sys.exit(main())
