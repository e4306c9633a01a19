"""
CLI interface for tlhmorph.

Usage:
    tlhmorph "QaghwIj"
    tlhmorph -d "bIQong"
    tlhmorph --json "Qa"
    tlhmorph --search kill
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tlhmorph import Completions, DictEntry, __version__, complete
from tlhmorph.completion import sorted_parses
from tlhmorph.dictionary import load_dictionary


# ============================================================================
# Output Formatting
# ============================================================================

def morpheme_text(morpheme) -> str:
    """Surface text of a morpheme (all its entries share it)."""
    return min(morpheme).tlh if morpheme else '?'


def format_entry(entry: DictEntry, detail: bool = False) -> str:
    """One entry as `text (pos)`, with its gloss when detailed."""
    text = entry.tlh
    if entry.homonym != 1:
        text = f"[{entry.homonym}] {text}"
    line = f"{text} ({entry.pos.value})"
    if detail and entry.en:
        line += f" - {', '.join(entry.en)}"
    return line


def format_default(result: Completions, limit: Optional[int] = None) -> str:
    """
    Default output: one line per parse, then the suggestions.

        Qagh | -wIj
        ─────
        -wIj (noun suffix type 1)
    """
    lines = []
    for parse in sorted_parses(result.parsed):
        lines.append(" | ".join(morpheme_text(m) for m in parse))

    suggestions = result.suggestions[:limit] if limit else result.suggestions
    if suggestions:
        if lines:
            lines.append("─" * 40)
        lines.extend(format_entry(e) for e in suggestions)

    return "\n".join(lines)


def format_detailed(result: Completions, limit: Optional[int] = None) -> str:
    """Detailed output: every homonym of every morpheme, with glosses."""
    lines = []
    for parse in sorted_parses(result.parsed):
        lines.append(" | ".join(morpheme_text(m) for m in parse))
        for morpheme in parse:
            for entry in sorted(morpheme):
                lines.append("  └─ " + format_entry(entry, detail=True))

    suggestions = result.suggestions[:limit] if limit else result.suggestions
    if suggestions:
        lines.append("─" * 40)
        lines.extend(format_entry(e, detail=True) for e in suggestions)

    return "\n".join(lines)


def format_json(word: str, result: Completions, limit: Optional[int] = None) -> str:
    """Format a result as JSON."""
    data = result.to_dict()
    if limit:
        data["suggestions"] = data["suggestions"][:limit]
    data["word"] = word
    return json.dumps(data, ensure_ascii=False, indent=2)


def format_search(entries: List[DictEntry]) -> str:
    return "\n".join(format_entry(e, detail=True) for e in entries)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tlhmorph",
        description="Klingon Morphological Analyzer and Word Completer",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Klingon word to analyze (read from stdin if omitted)",
    )
    parser.add_argument(
        "--dict", "-D",
        type=Path,
        default=None,
        help="Path to the zrajm dictionary file (dict.zdb)",
    )
    parser.add_argument(
        "--detail", "-d",
        action="store_true",
        help="Show every homonym with its gloss",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Show at most N suggestions",
    )
    parser.add_argument(
        "--search", "-s",
        action="store_true",
        help="Look TEXT up in the gloss index instead",
    )
    parser.add_argument(
        "--lang", "-l",
        choices=("en", "sv"),
        default="en",
        help="Gloss language for --search (default: en)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress information",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"tlhmorph {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.text is None:
        # Read from stdin
        text = sys.stdin.read().strip()
    else:
        text = args.text.strip()

    if not text:
        parser.print_help()
        sys.exit(1)

    try:
        dictionary = load_dictionary(args.dict)

        if args.search:
            print(format_search(dictionary.search(text, args.lang)))
            return

        result = complete(text, dictionary)

        if args.json:
            print(format_json(text, result, args.limit))
        elif args.detail:
            print(format_detailed(result, args.limit))
        else:
            print(format_default(result, args.limit))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
