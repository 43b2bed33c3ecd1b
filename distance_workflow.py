import argparse
import csv
import logging
from collections import namedtuple
from pathlib import Path

import numpy as np
import regex as reg
from tabulate import tabulate

from edit_distance import distance

PairResult = namedtuple('PairResult', ['word_a', 'word_b', 'distance', 'max_length', 'similarity'])

CSV_HEADER = ['Word_A', 'Word_B', 'Distance', 'Max_Length', 'Similarity']


class WordPairError(ValueError):
    """Raised when a word-pair file contains a line that is not exactly two fields."""
    def __init__(self, message=None):
        self.message = message
        super().__init__(self.message)


class Config:
    # Two fields per line, separated by a comma, tab or space run.
    # A field is either a run of non-separator characters or a double-quoted string,
    # which may be empty or contain whitespace.
    PAIR_PATTERN = reg.compile(
        r'^\s*(?:"(?P<a_quoted>[^"]*)"|(?P<a>[^\s,"]+))'
        r'\s*[,\t ]\s*'
        r'(?:"(?P<b_quoted>[^"]*)"|(?P<b>[^\s,"]+))\s*$'
    )

    def __init__(self, base_dir=None):
        self.base_dir = Path(base_dir) if base_dir else Path(__file__).parent
        self._set_directories()
        self._set_values()

    def _set_directories(self):
        self.data_dir = self.base_dir / 'data'
        self.log_dir = self.data_dir / 'logs'
        self.output_dir = self.data_dir / 'outputs'
        self.csv_dir = self.output_dir / 'csv'

    def _set_values(self):
        self.log_level = logging.INFO
        self.table_format = 'grid'
        self.pair_pattern = self.PAIR_PATTERN
        self.normalize_case = False

    def setup_logging(self):
        # Setup logging with file and console handlers
        self.log_dir.mkdir(parents=True, exist_ok=True)
        logfile = self.log_dir / 'logfile.log'
        file_handler = logging.FileHandler(logfile, mode='a', encoding='utf-8', delay=True)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(message)s'))

        logging.basicConfig(level=self.log_level, handlers=[file_handler, console_handler])

    def create_directories(self):
        for directory in [self.data_dir, self.log_dir, self.output_dir, self.csv_dir]:
            directory.mkdir(parents=True, exist_ok=True)


def parse_pair_line(line, pattern=Config.PAIR_PATTERN) -> tuple[str, str] | None:
    """Split one line into a (word_a, word_b) pair, or return None if it does not match."""
    match = pattern.match(line)
    if not match:
        return None
    word_a = match.group('a') if match.group('a') is not None else match.group('a_quoted')
    word_b = match.group('b') if match.group('b') is not None else match.group('b_quoted')
    return word_a, word_b


def load_word_pairs(path, config) -> list[tuple[str, str]]:
    path = Path(path)
    pairs = []
    # Decoded line by line so an encoding error can name the offending line
    with path.open('rb') as file:
        for line_number, raw_line in enumerate(file, start=1):
            try:
                stripped = raw_line.decode('utf-8').strip()
            except UnicodeDecodeError as e:
                raise WordPairError(f"{path}:{line_number}: not valid UTF-8 ({e.reason})") from e
            # Skip blank lines and comments
            if not stripped or stripped.startswith('#'):
                continue
            pair = parse_pair_line(stripped, config.pair_pattern)
            if pair is None:
                raise WordPairError(f"{path}:{line_number}: expected two words, got {stripped!r}")
            pairs.append(pair)

    logging.info(f'Loaded {len(pairs)} word pairs from {path}')
    return pairs


def compute_distances(pairs, config) -> list[PairResult]:
    results = []
    for word_a, word_b in pairs:
        if config.normalize_case:
            word_a, word_b = word_a.lower(), word_b.lower()

        dist = distance(word_a, word_b)
        max_length = max(len(word_a), len(word_b))
        # Two empty words are identical
        similarity = 1 - dist / max_length if max_length else 1.0

        logging.debug(f'{word_a!r} -> {word_b!r}: {dist}')
        results.append(PairResult(word_a, word_b, dist, max_length, similarity))

    summary = summarize(results)
    logging.info(f"Compared {summary['pairs']} pairs | mean distance {summary['mean_distance']:.2f} | "
                 f"max distance {summary['max_distance']} | identical {summary['identical']}")
    return results


def summarize(results) -> dict:
    distances = np.array([result.distance for result in results], dtype=int)
    if not distances.size:
        return {'pairs': 0, 'mean_distance': 0.0, 'max_distance': 0, 'identical': 0}
    return {
        'pairs': int(distances.size),
        'mean_distance': float(np.mean(distances)),
        'max_distance': int(np.max(distances)),
        'identical': int(np.count_nonzero(distances == 0)),
    }


def format_results_table(results, table_format='grid') -> str:
    rows = [[r.word_a, r.word_b, r.distance, r.max_length, r.similarity] for r in results]
    # Words are never parsed as numbers ("007" stays "007")
    return tabulate(rows, headers=CSV_HEADER, tablefmt=table_format, floatfmt='.4f', disable_numparse=[0, 1])


def export_results_to_csv(results, csv_path) -> Path:
    csv_path = Path(csv_path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with csv_path.open('w', newline='', encoding='utf-8') as file:
        writer = csv.writer(file)
        writer.writerow(CSV_HEADER)
        for r in results:
            writer.writerow([r.word_a, r.word_b, r.distance, r.max_length, f'{r.similarity:.4f}'])

    logging.info(f'Results written to {csv_path}')
    return csv_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Levenshtein distance between word pairs')
    parser.add_argument('words', nargs='*', help='Two words to compare')
    parser.add_argument('-f', '--pairs-file', help='File with one word pair per line')
    parser.add_argument('-o', '--csv', metavar='PATH', help='Write results to this CSV file')
    parser.add_argument('--csv-default', action='store_true',
                        help='Write results to data/outputs/csv/distances.csv')
    parser.add_argument('-i', '--ignore-case', action='store_true', help='Lowercase both words before comparing')
    parser.add_argument('-t', '--table-format', default='grid', help='tabulate table format')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug output')
    parser.add_argument('--base-dir', default=None, help='Directory holding data/logs and data/outputs')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.pairs_file and args.words:
        parser.error('give either two words or --pairs-file, not both')
    if not args.pairs_file and len(args.words) != 2:
        parser.error('expected exactly two words')

    config = Config(args.base_dir or Path.cwd())
    config.table_format = args.table_format
    config.normalize_case = args.ignore_case
    if args.verbose:
        config.log_level = logging.DEBUG
    config.create_directories()
    config.setup_logging()

    try:
        pairs = load_word_pairs(args.pairs_file, config) if args.pairs_file else [tuple(args.words)]
    except (WordPairError, OSError) as e:
        logging.error(f'Could not read word pairs: {e}')
        return 1

    results = compute_distances(pairs, config)
    print(format_results_table(results, config.table_format))

    if args.csv:
        export_results_to_csv(results, args.csv)
    if args.csv_default:
        export_results_to_csv(results, config.csv_dir / 'distances.csv')

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
