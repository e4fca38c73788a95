"""Success Envelopes — the stable shapes every successful response uses.

Invariants:
    - Single resource: {success: true, data}
    - Collection: {success: true, count, pagination, data}; count is items on this page
"""

from devcamper.core.list_query import ListResult


def single(data: dict) -> dict:
    return {"success": True, "data": data}


def collection(result: ListResult) -> dict:
    return {
        "success": True,
        "count": len(result.items),
        "pagination": result.pagination.to_dict(),
        "data": result.items,
    }
