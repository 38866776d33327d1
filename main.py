#!/usr/bin/env python3
"""Deskboard entry point.

Run with:
    python main.py [serve]
    python -m deskboard [serve]
"""

from deskboard.__main__ import main


if __name__ == "__main__":
    main()
