"""
Django admin configuration for bookkeeping models.

Balances and adjustment rows are read-only here: changing a balance
outside the posting engine would break the ledger.
"""

from django.contrib import admin

from bookkeeping.models import (
    Account,
    BalanceAdjustment,
    Category,
    Member,
    Transaction,
    Transfer,
)


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "created_at")
    search_fields = ("name", "user__email")
    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "user", "created_at")
    list_filter = ("type",)
    search_fields = ("name", "user__email")
    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "member", "balance", "currency")
    list_filter = ("type", "currency")
    search_fields = ("name", "member__name", "member__user__email")
    raw_id_fields = ("member",)
    readonly_fields = ("balance", "created_at", "updated_at")


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Read-only: edits must go through the API so balances follow."""

    list_display = ("date", "type", "amount", "account", "category", "member")
    list_filter = ("type", "date")
    search_fields = ("description", "account__name", "user__email")
    ordering = ("-date", "-created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Transfer)
class TransferAdmin(admin.ModelAdmin):
    """Read-only: edits must go through the API so balances follow."""

    list_display = ("date", "amount", "fee", "from_account", "to_account", "member")
    list_filter = ("date",)
    search_fields = ("description", "user__email")
    ordering = ("-date", "-created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(BalanceAdjustment)
class BalanceAdjustmentAdmin(admin.ModelAdmin):
    list_display = ("account", "reason", "delta", "balance_after", "created_at")
    list_filter = ("reason",)
    search_fields = ("account__name",)
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
