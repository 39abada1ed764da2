"""Bind a small CSV file onto a dataclass.

Run from the repository root:

    python examples/bind_people.py
    python examples/bind_people.py --path examples/data/people.csv --timezone UTC
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime

from csvbind import Options, Row, open_binder
from csvbind.records import ZERO_TIME
from csvbind.utils.logging_config import setup_logging

MAPPING = {
    "id": "ID",
    "name": "Name",
    "email": "Email",
    "joined": "JoinedAt",
}


@dataclass
class Person:
    ID: int = 0
    Name: str = ""
    Email: str = ""
    JoinedAt: datetime = field(default=ZERO_TIME)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--path", default="examples/data/people.csv")
    parser.add_argument("--timezone", default="Europe/Paris")
    parser.add_argument("--null-marker", default="NULL")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    setup_logging("INFO", fmt="%(levelname)s %(shortname)s - %(message)s")
    logger = logging.getLogger("bind_people")

    opts = Options(null_marker=args.null_marker, timezone=args.timezone)
    people: list[Person] = []

    def _collect(row: Row) -> bool:
        person = Person()
        row.bind(person, MAPPING)
        people.append(person)
        return True

    with open_binder(args.path, opts) as binder:
        binder.for_each(_collect)

    for person in people:
        logger.info("%s", person)


if __name__ == "__main__":
    main()
