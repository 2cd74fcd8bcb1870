"""
FilterSets for the bookkeeping list endpoints.

Every queryset passed in is already scoped to the requesting user by the
view; these filters only narrow and order it.

Filters:
    CategoryFilter: ?type=
    AccountFilter: ?member_id=&type=
    TransactionFilter: ids, type, date range, amount bounds, description, sort
    TransferFilter: ?member_id=&account_id= (matches either side)
"""

import django_filters as filters
from django.db.models import Q

from bookkeeping.models import Account, AccountType, Category, Transaction, TransactionType, Transfer

TRANSACTION_SORT_FIELDS = ("date", "amount", "created_at", "id")


class CategoryFilter(filters.FilterSet):
    type = filters.ChoiceFilter(choices=TransactionType.choices)

    class Meta:
        model = Category
        fields = ["type"]


class AccountFilter(filters.FilterSet):
    member_id = filters.UUIDFilter(field_name="member_id")
    type = filters.ChoiceFilter(choices=AccountType.choices)

    class Meta:
        model = Account
        fields = ["member_id", "type"]


class TransactionFilter(filters.FilterSet):
    """
    Query filters for the transaction list.

    The date range applies only when both start_date and end_date are
    given (inclusive). Unknown sort_by values fall back to date; any
    sort_order other than "asc" sorts descending.
    """

    member_id = filters.UUIDFilter(field_name="member_id")
    account_id = filters.UUIDFilter(field_name="account_id")
    category_id = filters.UUIDFilter(field_name="category_id")
    type = filters.ChoiceFilter(choices=TransactionType.choices)
    start_date = filters.DateFilter(method="filter_date_range")
    end_date = filters.DateFilter(method="filter_date_range")
    min_amount = filters.NumberFilter(field_name="amount", lookup_expr="gte")
    max_amount = filters.NumberFilter(field_name="amount", lookup_expr="lte")
    description = filters.CharFilter(field_name="description", lookup_expr="icontains")
    sort_by = filters.CharFilter(method="filter_noop")
    sort_order = filters.CharFilter(method="filter_noop")

    class Meta:
        model = Transaction
        fields = [
            "member_id",
            "account_id",
            "category_id",
            "type",
            "start_date",
            "end_date",
            "min_amount",
            "max_amount",
            "description",
        ]

    def filter_date_range(self, queryset, name, value):
        start = self.form.cleaned_data.get("start_date")
        end = self.form.cleaned_data.get("end_date")
        # Both filters call this; apply the range once, from start_date
        if name != "start_date" or not (start and end):
            return queryset
        return queryset.filter(date__range=(start, end))

    def filter_noop(self, queryset, name, value):
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)

        sort_by = (self.form.cleaned_data.get("sort_by") or "").lower()
        if sort_by not in TRANSACTION_SORT_FIELDS:
            sort_by = "date"
        descending = (self.form.cleaned_data.get("sort_order") or "desc").lower() != "asc"

        prefix = "-" if descending else ""
        ordering = [f"{prefix}{sort_by}"]
        if sort_by != "id":
            ordering.append(f"{prefix}created_at" if sort_by != "created_at" else f"{prefix}id")
        return queryset.order_by(*ordering)


class TransferFilter(filters.FilterSet):
    member_id = filters.UUIDFilter(field_name="member_id")
    account_id = filters.UUIDFilter(method="filter_account")

    class Meta:
        model = Transfer
        fields = ["member_id", "account_id"]

    def filter_account(self, queryset, name, value):
        return queryset.filter(Q(from_account_id=value) | Q(to_account_id=value))
