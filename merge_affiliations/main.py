import os
import sys
import logging
import argparse

from merge_affiliations.config import build_run_settings, load_config
from merge_affiliations.workflows import MergeProcessor, StatisticsProcessor


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="""
        Reconcile the submission system export with the paper search system export
        and write a merged, annotated file for manual review.

        Two modes:

        1. Merge affiliations into the search system records (default):
           python %(prog)s --merge --config config.yaml

        2. Print key and duplication statistics of both exports:
           python %(prog)s --stats --config config.yaml
        """,
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("-c", "--config", required=True,
                        help="Path to the YAML configuration file.")
    parser.add_argument("-o", "--output-file",
                        help="Override the output_file setting of the configuration.")
    parser.add_argument("--no-sort", action="store_true",
                        help="Leave the output in matching order instead of sorting it by paper id.")
    parser.add_argument("-m", "--memory-limit",
                        help="Memory limit for the output sort (e.g., '1GB', '512MB').")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING").upper(),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level. Default: LOG_LEVEL environment variable or WARNING.")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--merge", action="store_true",
                      help="Run in merge mode (default).")
    mode.add_argument("--stats", action="store_true",
                      help="Print statistics about keys and duplicates instead of merging.")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    config = load_config(args.config)
    try:
        settings = build_run_settings(config)
    except (KeyError, ValueError, TypeError) as e:
        print(f"Error: Invalid configuration: {e}")
        sys.exit(1)

    if args.output_file:
        settings.output_file = args.output_file
    if args.no_sort:
        settings.sort_output = False
    if args.memory_limit:
        settings.memory_limit = args.memory_limit

    if args.stats:
        StatisticsProcessor(settings).run()
    else:
        MergeProcessor(settings).run()


if __name__ == '__main__':
    main()
