#!/usr/bin/env python3
"""
Setup script to download Bible translations.

Public domain translations are fetched from openbible.com for offline use.
Run from the api directory.

Usage:
    python -m scripts.setup_translations
    python -m scripts.setup_translations --translations KJV ASV
    python -m scripts.setup_translations --list
    python -m scripts.setup_translations --all
    python -m scripts.setup_translations --remove ERV
    python -m scripts.setup_translations --custom "My Bible" ~/bible.txt
    python -m scripts.setup_translations --default ASV
"""

import argparse
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.bible.errors import BibleError
from services.bible.storage import BibleStorage
from services.bible.translations import TRANSLATIONS, Translation, TranslationManager, load_translation

# Default translation to download
DEFAULT_TRANSLATIONS = ["KJV"]


def print_progress(downloaded: int, total: int):
    """Print download progress bar."""
    if total == 0:
        return
    percent = (downloaded / total) * 100
    bar_length = 30
    filled = int(bar_length * downloaded / total)
    bar = "=" * filled + "-" * (bar_length - filled)
    print(f"\r    [{bar}] {percent:.1f}%", end="", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Download and manage Bible translations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scripts.setup_translations                       # Download KJV
  python -m scripts.setup_translations --list                # List translations
  python -m scripts.setup_translations --translations KJV ASV
  python -m scripts.setup_translations --all                 # Download everything
        """
    )
    parser.add_argument(
        "--translations",
        nargs="+",
        default=None,
        metavar="CODE",
        help="Specific translations to download (e.g., KJV ASV)"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available translations and exit"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Download all available translations"
    )
    parser.add_argument(
        "--remove",
        nargs="+",
        metavar="CODE",
        help="Remove specified translations"
    )
    parser.add_argument(
        "--custom",
        nargs=2,
        metavar=("NAME", "PATH"),
        help="Validate and register a custom translation file"
    )
    parser.add_argument(
        "--default",
        metavar="CODE",
        help="Set the default translation"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show log output"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    storage = BibleStorage()
    print(f"Bible storage: {storage.base_path}")
    print(f"Translations path: {storage.translations_path}")
    print()

    manager = TranslationManager(storage)

    # Handle --list
    if args.list:
        print("Available translations:")
        print("-" * 60)
        for t in manager.list_available():
            installed = "✓" if t["installed"] else " "
            print(f"  [{installed}] {t['code']:6} {t['name']}")
            print(f"      {t['description']}")
        custom = storage.get_custom_translations()
        if custom:
            print("\nCustom translations:")
            for name, path in custom.items():
                print(f"  {name}: {path}")
        print(f"\nDefault translation: {storage.get_default_translation()}")
        return 0

    # Handle --remove
    if args.remove:
        print("Removing translations:")
        for code in args.remove:
            print(f"  {code.upper()}: ", end="", flush=True)
            if manager.remove(code):
                print("removed")
            else:
                print("not installed")
        return 0

    # Handle --custom
    if args.custom:
        name, path = args.custom
        try:
            store = load_translation(Translation.custom(name, path))
        except BibleError as e:
            print(f"Error: {e}")
            return 1
        storage.register_custom(name, os.path.abspath(path))
        print(f"Registered {name}: {store.book_count()} books, {store.total_verses()} verses")
        return 0

    # Handle --default
    if args.default:
        try:
            manager.get_translation(args.default)
        except BibleError as e:
            print(f"Error: {e}")
            return 1
        code = args.default.upper() if args.default.upper() in TRANSLATIONS else args.default
        storage.update_config(default_translation=code)
        print(f"Default translation: {code}")
        return 0

    # Determine which translations to download
    if args.all:
        to_download = list(TRANSLATIONS.keys())
    elif args.translations:
        to_download = [t.upper() for t in args.translations]
    else:
        to_download = DEFAULT_TRANSLATIONS

    invalid = [t for t in to_download if t not in TRANSLATIONS]
    if invalid:
        print(f"Error: Unknown translations: {', '.join(invalid)}")
        print(f"Available translations: {', '.join(sorted(TRANSLATIONS))}")
        return 1

    print(f"Downloading {len(to_download)} translation(s):")
    print("-" * 40)

    success_count = 0
    skip_count = 0
    fail_count = 0

    for code in to_download:
        name = TRANSLATIONS[code]["name"]

        if manager.is_installed(code):
            print(f"  {code}: already installed ({name})")
            skip_count += 1
            continue

        print(f"  {code}: downloading {name}...")

        try:
            manager.download(code, progress_callback=print_progress)
            print("\r" + " " * 50 + "\r", end="")  # Clear progress bar
            print(f"  {code}: ✓ installed")
            success_count += 1
        except BibleError as e:
            print(f"\n  {code}: ✗ failed - {e}")
            fail_count += 1

    print("-" * 40)
    print(f"Downloaded: {success_count}, Skipped: {skip_count}, Failed: {fail_count}")

    return 0 if fail_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
