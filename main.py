#!/usr/bin/env python3
"""PomoWidget entry point.

Run with:
    python main.py
    python -m pomowidget
"""

from pomowidget.__main__ import main


if __name__ == "__main__":
    main()
