#!/usr/bin/env python3
"""
Verify a generated configuration reference.
Checks for:
- Table-of-contents links without a matching anchor
- Unbalanced <ul> lists
- Duplicate anchor names
"""

import re
import sys
from pathlib import Path
from typing import List, Tuple

HREF_PATTERN = re.compile(r'href="#([^"]+)"')
NAME_PATTERN = re.compile(r'name="([^"]+)"')


class DocVerifier:
    def __init__(self, file_path: str):
        self.file_path = file_path
        self.lines: List[str] = []
        self.issues: List[Tuple[int, str, str]] = []

    def load_file(self):
        """Load the HTML file."""
        with open(self.file_path, 'r', encoding='utf-8') as f:
            self.lines = f.readlines()

    def check_anchor_links(self):
        """Every internal link needs an anchor with the same name."""
        names = set()
        for line in self.lines:
            names.update(NAME_PATTERN.findall(line))

        for i, line in enumerate(self.lines, start=1):
            for target in HREF_PATTERN.findall(line):
                if target not in names:
                    self.issues.append((i, 'ERROR', f'Link to missing anchor: #{target}'))

    def check_duplicate_anchors(self):
        """Anchor names must be unique for links to be unambiguous."""
        seen = {}
        for i, line in enumerate(self.lines, start=1):
            for name in NAME_PATTERN.findall(line):
                if name in seen:
                    self.issues.append((i, 'WARNING', f'Duplicate anchor "{name}" (first at line {seen[name]})'))
                else:
                    seen[name] = i

    def check_list_balance(self):
        """Check that every <ul> is closed and no </ul> is unmatched."""
        depth = 0
        open_lines = []

        for i, line in enumerate(self.lines, start=1):
            for tag in re.findall(r'</?ul>', line):
                if tag == '<ul>':
                    depth += 1
                    open_lines.append(i)
                elif depth == 0:
                    self.issues.append((i, 'ERROR', 'Unmatched </ul>'))
                else:
                    depth -= 1
                    open_lines.pop()

        for start in open_lines:
            self.issues.append((start, 'ERROR', f'Unclosed <ul> starting at line {start}'))

    def verify_all(self):
        """Run all verification checks."""
        print(f"Verifying {self.file_path}...")
        print()

        self.load_file()

        self.check_anchor_links()
        self.check_duplicate_anchors()
        self.check_list_balance()

        return self.report()

    def report(self) -> bool:
        """Print verification report and return True if no errors."""
        if not self.issues:
            print("All checks passed.")
            return True

        # Sort by line number
        self.issues.sort(key=lambda x: x[0])

        errors = [i for i in self.issues if i[1] == 'ERROR']
        warnings = [i for i in self.issues if i[1] == 'WARNING']

        print(f"Found {len(self.issues)} issues:")
        print(f"  - {len(errors)} ERRORS")
        print(f"  - {len(warnings)} WARNINGS")
        print()

        for title, group in (("ERRORS (must fix):", errors), ("WARNINGS (should review):", warnings)):
            if group:
                print("=" * 80)
                print(title)
                print("=" * 80)
                for line, severity, message in group:
                    print(f"Line {line}: {message}")
                print()

        return len(errors) == 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        print("Usage: kconfig2html-verify <path_to_html_file>")
        return 1

    file_path = argv[0]

    if not Path(file_path).exists():
        print(f"Error: File not found: {file_path}")
        return 1

    verifier = DocVerifier(file_path)
    success = verifier.verify_all()

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
