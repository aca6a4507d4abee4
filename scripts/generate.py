"""
Generate one crossword grid from a bag of letters.

Usage:
    python -m scripts.generate <letters> [--dictionary PATH] [--seed N]

Examples:
    python -m scripts.generate SEAT
    python -m scripts.generate PLANETS --seed 7 --size-factor 3
    python -m scripts.generate STREAM --no-shuffle --json

Prints the cropped grid, then each placed word with its clue number,
direction and start cell. Words that found no slot are listed last.
"""
import argparse
import json
import random
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgrid.settings import settings
from wordgrid.generator import CrosswordGenerator


def main():
    parser = argparse.ArgumentParser(description="Word Grid Generator")
    parser.add_argument("letters", help="Letter bag, e.g. SEAT")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Newline-separated word list (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Shortest dictionary word to use (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for orientation and shuffle (default: random)")
    parser.add_argument("--size-factor", type=int, default=settings.GRID_SIZE_FACTOR,
                        help=f"Grid side = letters x factor before cropping (default: {settings.GRID_SIZE_FACTOR})")
    parser.add_argument("--no-shuffle", action="store_true",
                        help="Keep candidate words in dictionary order")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args()

    letters = args.letters.strip().upper()
    if not letters.isalpha():
        print(f"Error: letters must be alphabetic, got {args.letters!r}")
        sys.exit(1)

    if args.size_factor < 1:
        print(f"Error: --size-factor must be at least 1, got {args.size_factor}")
        sys.exit(1)

    dict_path = Path(args.dictionary)
    if not dict_path.exists():
        print(f"Error: {dict_path} does not exist")
        sys.exit(1)

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    generator = CrosswordGenerator.from_file(str(dict_path), args.min_length, rng=rng,
                                             size_factor=args.size_factor, max_words=settings.MAX_WORDS)
    result = generator.generate(letters, shuffle=not args.no_shuffle)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    grid = result.grid
    print(f"{grid.width}x{grid.height}, placed {result.placed_count}/{result.requested_count} words")
    print()
    print(grid.render())
    print()

    numbers = grid.clue_numbers()
    for p in grid.placements:
        x, y = p.start
        print(f"  {numbers[p.start]:>2}. {p.word:<12} {p.direction.value} at ({x}, {y})")

    placed = grid.used_words
    missing = [w for w in result.candidates if w not in placed]
    if missing:
        print()
        print(f"Not placed: {', '.join(missing)}")


if __name__ == "__main__":
    main()
