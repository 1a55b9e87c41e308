#!/usr/bin/env python3
"""ate - a pager for styled text with hyperlinks.

Usage:
    some-command | python main.py

Controls:
    Up/Down: Scroll one row
    Space / b: Page forward / backward
    /: Search links by their text
    n / N: Select next / previous link
    Enter: Open the selected link with $ATE_OPENER
    q or Ctrl-C: Quit
"""

from ate.__main__ import main


if __name__ == "__main__":
    main()
