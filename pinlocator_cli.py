#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Entry point cho CLI tool pinlocator
Có thể chạy: python pinlocator_cli.py hoặc python -m pinlocator.cli
"""

from pinlocator.cli import main

if __name__ == "__main__":
    import sys
    sys.exit(main())
