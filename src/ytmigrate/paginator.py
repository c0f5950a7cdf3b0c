"""Cursor-driven pagination over list calls."""

from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

PageFetcher = Callable[[Optional[str]], Tuple[List[T], Optional[str]]]


def paginate(fetch: PageFetcher) -> Iterator[List[T]]:
    """Iterate over pages until the server stops returning a cursor.

    The first call gets None. Each following call gets the cursor returned
    by the previous page. Errors raised by fetch propagate and end the loop.

    Args:
        fetch: Callable taking a cursor and returning (items, next cursor)

    Yields:
        One list of items per page
    """
    cursor = None
    while True:
        items, cursor = fetch(cursor)
        yield items
        if not cursor:
            break


def iter_items(fetch: PageFetcher) -> Iterator[T]:
    """Iterate over every item of every page.

    Args:
        fetch: Callable taking a cursor and returning (items, next cursor)

    Yields:
        Items in page order
    """
    for items in paginate(fetch):
        yield from items
