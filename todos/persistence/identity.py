from typing import Any, Iterable, Mapping


def next_id(records: Iterable[Mapping[str, Any]]) -> int:
    """
    Next free id for a collection of stored records.

    Recomputed from the live data on every call, so ids never collide after
    the collection has been reset or reloaded from a session.
    """
    return max((record["id"] for record in records), default=0) + 1
