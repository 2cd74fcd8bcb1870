"""
Pagination classes for bookkeeping lists.

Page-number pagination, since clients jump between pages of a filtered
ledger and need the total count:

    ?page=2&limit=50
"""

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class LedgerPagination(PageNumberPagination):
    """
    Page-number pagination for transactions, transfers and accounts.

    Default: 20 items per page
    Maximum: 100 items per page

    Query parameters:
        page: 1-based page number
        limit: Items per page (optional override)
    """

    page_size = 20
    max_page_size = 100
    page_size_query_param = "limit"

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "page": self.page.number,
                "limit": self.get_page_size(self.request),
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )

    def get_paginated_response_schema(self, schema):
        response_schema = super().get_paginated_response_schema(schema)
        response_schema["properties"]["page"] = {"type": "integer", "example": 1}
        response_schema["properties"]["limit"] = {"type": "integer", "example": 20}
        return response_schema
