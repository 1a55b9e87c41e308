"""Sample styled output with OSC 8 hyperlinks for trying the pager.

Usage:
    python demo_links.py | ate

Writes colored, bold and underlined text and a few screens of links,
some of them wrapping across rows, with ESC ] 8 sequences regardless of
whether stdout is a terminal.
"""

from __future__ import annotations

SITES = [
    ("Python", "https://www.python.org/"),
    ("Python Package Index", "https://pypi.org/"),
    ("blessed documentation", "https://blessed.readthedocs.io/"),
    ("curtsies on GitHub", "https://github.com/bpython/curtsies"),
    ("Unicode text segmentation", "https://www.unicode.org/reports/tr29/"),
    ("ECMA-48", "https://ecma-international.org/publications-and-standards/standards/ecma-48/"),
]


def hyperlink(url: str, text: str, link_id: str | None = None) -> str:
    """Wrap text in an OSC 8 hyperlink terminated with ST."""
    params = f"id={link_id}" if link_id else ""
    return f"\x1b]8;{params};{url}\x1b\\{text}\x1b]8;;\x1b\\"


def sgr(*codes: int) -> str:
    return f"\x1b[{';'.join(str(c) for c in codes)}m"


def main() -> None:
    print(f"{sgr(1)}ate demo{sgr(0)}: press {sgr(7)}/{sgr(27)} to search links, "
          f"{sgr(4)}n{sgr(24)}/{sgr(4)}N{sgr(24)} to step through them.")
    print()
    for i in range(1, 4):
        print(f"{sgr(38, 5, 208)}Section {i}{sgr(39)}")
        for name, url in SITES:
            print(f"  {sgr(32)}*{sgr(0)} {hyperlink(url, name)} {sgr(2)}({url}){sgr(22)}")
        print()
    long_text = " ".join(["a link that is long enough to wrap across rows"] * 3)
    print(hyperlink("https://example.com/long", f"{sgr(38, 2, 90, 160, 255)}{long_text}{sgr(0)}"))
    print(f"{sgr(41)}{sgr(97)} red background {sgr(0)} {sgr(9)}struck{sgr(29)} {sgr(3)}italic{sgr(23)}")
    print("Wide text: 宽字符 and emoji 👨‍👩‍👧‍👧 🏳️‍⚧️")


if __name__ == "__main__":
    main()
