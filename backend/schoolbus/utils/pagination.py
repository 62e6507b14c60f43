from sqlalchemy import or_


def apply_search(query, model, search_term, search_columns):
    """
    Applies a case-insensitive search over the given columns.

    Args:
      query: base SQLAlchemy query
      model: SQLAlchemy model class
      search_term: string to search for
      search_columns: list of column names (strings) to search within model
    """
    if search_term:
        search_filters = [
            getattr(model, col).ilike(f"%{search_term}%") for col in search_columns
        ]
        query = query.filter(or_(*search_filters))
    return query


def paginate(query, page=1, per_page=50):
    """
    Paginates a Flask-SQLAlchemy query.

    Returns:
      Pagination object with .items, .total, .page, .pages etc.
    """
    page = page if page and page > 0 else 1
    per_page = per_page if per_page and per_page > 0 else 50

    return query.paginate(page=page, per_page=per_page, error_out=False)


def pagination_meta(paginated):
    return {
        "currentPage": paginated.page,
        "totalPages": paginated.pages,
        "totalItems": paginated.total,
        "itemsPerPage": paginated.per_page,
    }
