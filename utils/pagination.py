import math

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def clamp_page(page, limit, default_limit=DEFAULT_PAGE_SIZE, max_limit=MAX_PAGE_SIZE):
    """
    Normalizes 1-based page / page size. Missing or out-of-range values
    are defaulted or clamped, never rejected.
    """
    try:
        page = int(page) if page is not None else 1
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit) if limit is not None else default_limit
    except (TypeError, ValueError):
        limit = default_limit

    page = max(1, page)
    limit = max(1, min(max_limit, limit))
    return page, limit


def total_pages(total: int, limit: int) -> int:
    return max(1, math.ceil(total / limit))


def paginate(queryset, page=None, limit=None) -> dict:
    """
    Slices a queryset into the {data, total, page, limit, total_pages} envelope.
    `data` is a list of model instances; callers serialize it.
    """
    page, limit = clamp_page(page, limit)
    total = queryset.count()
    offset = (page - 1) * limit
    data = list(queryset[offset:offset + limit])

    return {
        "data": data,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages(total, limit),
    }
