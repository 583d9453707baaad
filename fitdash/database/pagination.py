from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence
from fitdash.config import settings


def fetch_all(build_query: Callable[[], Any], page_size: Optional[int] = None) -> List[Dict[str, Any]]:
    """Read every row of a select, one range() page at a time.

    PostgREST caps each response at the project's max-rows, so an unwindowed
    select silently drops the tail. build_query must return a fresh, ordered
    query builder for every call; paging stops at the first short page.
    """
    size = page_size or settings.supabase_page_size
    rows: List[Dict[str, Any]] = []
    start = 0
    while True:
        page = build_query().range(start, start + size - 1).execute().data or []
        rows.extend(page)
        if len(page) < size:
            return rows
        start += size


def chunked(values: Sequence[Any], size: Optional[int] = None) -> Iterator[List[Any]]:
    """Split ids for in_() filters into URL-sized chunks"""
    size = size or settings.supabase_in_chunk_size
    for index in range(0, len(values), size):
        yield list(values[index:index + size])
