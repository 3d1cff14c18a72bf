#!/usr/bin/env python3
"""
gitlane - interactive commit graph

This is a convenience wrapper for running from the repo root.
The actual entry point is gitlane.main:main (for pip install).
"""

from gitlane.main import main

if __name__ == "__main__":
    main()
