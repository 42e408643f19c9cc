import logging
import os
import sys

from rbindex.models.sortedcontainers import RedBlackTree
from rbindex.render import format_levels

logger = logging.getLogger()

DEFAULT_VALUES = [10, 5, 20, 1, 2, 7, 15, 30]


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    args = sys.argv[1:] if argv is None else argv
    try:
        values = [int(arg) for arg in args] if args else DEFAULT_VALUES
    except ValueError as e:
        logger.error(f"Invalid value: {e}")
        return 2

    tree = RedBlackTree()
    for value in values:
        tree.insert(value)
    logger.debug(f"Inserted {tree.size()} values, black height {tree.black_height()}")

    print(format_levels(tree))
    print()

    for value in values:
        tree.delete(value)
        print(f"after delete value {value}:")
        print(format_levels(tree))
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
