from __future__ import annotations

import logging
from typing import Iterable, Iterator, TypeVar

from .errors import ChainLinkError, NullArgumentError

logger = logging.getLogger(__name__)

R = TypeVar("R")


def set_next(record: R, next_record: R | None) -> R:
    if record is None:
        raise NullArgumentError("set_next() needs a record")
    if next_record is record:
        raise ChainLinkError("a record cannot be linked to itself")
    record.next = next_record
    return record


def get_next(record: R) -> R | None:
    if record is None:
        raise NullArgumentError("get_next() needs a record")
    return record.next


def get_last(record: R) -> R:
    if record is None:
        raise NullArgumentError("get_last() needs a record")
    if record.next is None:
        logger.warning("get_last() was called on a single, unlinked %s record", _name(record))
        return record
    node = record
    while node.next is not None:
        node = node.next
    return node


def iter_chain(head: R | None) -> Iterator[R]:
    node = head
    while node is not None:
        yield node
        node = node.next


def link(records: Iterable[R]) -> R | None:
    items = list(records)
    for current, following in zip(items, items[1:]):
        set_next(current, following)
    if items:
        items[-1].next = None
        return items[0]
    return None


def free(record: R) -> None:
    if record is None:
        raise NullArgumentError("free() needs a record")
    if record.next is not None:
        raise ChainLinkError(
            f"pointer to next {_name(record)} was not None, unlink it before freeing"
        )
    record.release()


def free_chain(head: R | None) -> int:
    if head is None:
        logger.warning("free_chain() was called with an empty chain")
        return 0
    count = 0
    node = head
    while node is not None:
        following = node.next
        node.next = None
        free(node)
        count += 1
        node = following
    return count


def _name(record: object) -> str:
    return getattr(record, "dxftype", type(record).__name__)
