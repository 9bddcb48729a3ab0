import logging
import sys

from cba_search.io_utils import load_corpus
from cba_search.logging_setup import setup_logging
from cba_search.qa import build_augmentation
from cba_search.settings import load_settings


def main() -> None:
    """Run one search against the snapshots in CBA_DATA_DIR and print the augmentation."""
    setup_logging(logging.DEBUG)
    _, options, paths = load_settings()
    index = load_corpus(paths.data_dir)

    query = " ".join(sys.argv[1:]) or "How do Bird rights work?"
    result = index.search(query, options)
    print(build_augmentation(result, index.match_entities(query)))
    print("\nSources:")
    for label in result.source_labels():
        print(f"- {label}")


if __name__ == "__main__":
    main()
