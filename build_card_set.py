#!/usr/bin/env python3
"""Entry point wrapper for the card set converter."""

from mseset.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
