"""
Bookkeeping API views.

Endpoints (all under /api/v1/, all scoped to the authenticated user):
    members/                     - Household members
    categories/                  - Income/expense categories
    accounts/                    - Accounts and their adjustment history
    transactions/                - Income/expense postings
    transfers/                   - Account-to-account transfers (no update)

Views only translate HTTP to service calls. Every balance change goes
through the services in bookkeeping.services; service exceptions are
rendered by core.exception_handlers.
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookkeeping.filters import (
    AccountFilter,
    CategoryFilter,
    TransactionFilter,
    TransferFilter,
)
from bookkeeping.models import Account, Category, Member, Transaction, Transfer
from bookkeeping.pagination import LedgerPagination
from bookkeeping.serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    BalanceAdjustmentSerializer,
    CategorySerializer,
    MemberSerializer,
    TransactionCreateSerializer,
    TransactionSerializer,
    TransactionUpdateSerializer,
    TransferCreateSerializer,
    TransferSerializer,
)
from bookkeeping.services import (
    AccountService,
    OwnershipValidator,
    RecordService,
    TransactionService,
    TransferService,
)

UUID_PATTERN = (
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class OwnedRecordViewSet(viewsets.ModelViewSet):
    """
    Base ViewSet for records scoped to request.user.

    Lookups go through a service getter so a missing row and another
    user's row produce the same NotFoundError. Deletes go through
    RecordService so protected references become 409 Conflict.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN
    filter_backends = [DjangoFilterBackend]
    model = None

    def get_queryset(self):
        if not self.request.user.is_authenticated:
            return self.model.objects.none()
        return self.scope_queryset(self.model.objects.all())

    def scope_queryset(self, queryset):
        return queryset.filter(user=self.request.user)

    def get_object(self):
        return self.lookup_owned(self.kwargs[self.lookup_field])

    def lookup_owned(self, pk):
        raise NotImplementedError

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    def perform_destroy(self, instance):
        RecordService.delete(instance)


@extend_schema_view(
    list=extend_schema(operation_id="list_members", summary="List members", tags=["Members"]),
    create=extend_schema(operation_id="create_member", summary="Create member", tags=["Members"]),
    retrieve=extend_schema(operation_id="get_member", summary="Get member", tags=["Members"]),
    update=extend_schema(operation_id="replace_member", summary="Replace member", tags=["Members"]),
    partial_update=extend_schema(
        operation_id="update_member", summary="Update member", tags=["Members"]
    ),
    destroy=extend_schema(
        operation_id="delete_member",
        summary="Delete member",
        description="Refused with 409 while the member still has accounts or postings.",
        tags=["Members"],
    ),
)
class MemberViewSet(OwnedRecordViewSet):
    """ViewSet for household members."""

    model = Member
    serializer_class = MemberSerializer

    def lookup_owned(self, pk):
        return OwnershipValidator.get_member(self.request.user, pk)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_categories", summary="List categories", tags=["Categories"]
    ),
    create=extend_schema(
        operation_id="create_category", summary="Create category", tags=["Categories"]
    ),
    retrieve=extend_schema(
        operation_id="get_category", summary="Get category", tags=["Categories"]
    ),
    update=extend_schema(
        operation_id="replace_category", summary="Replace category", tags=["Categories"]
    ),
    partial_update=extend_schema(
        operation_id="update_category", summary="Update category", tags=["Categories"]
    ),
    destroy=extend_schema(
        operation_id="delete_category",
        summary="Delete category",
        description="Refused with 409 while transactions still use the category.",
        tags=["Categories"],
    ),
)
class CategoryViewSet(OwnedRecordViewSet):
    """ViewSet for income/expense categories."""

    model = Category
    serializer_class = CategorySerializer
    filterset_class = CategoryFilter

    def lookup_owned(self, pk):
        return OwnershipValidator.get_category(self.request.user, pk)


@extend_schema_view(
    list=extend_schema(operation_id="list_accounts", summary="List accounts", tags=["Accounts"]),
    create=extend_schema(
        operation_id="open_account",
        summary="Open account",
        description="Create an account for one of your members, optionally with an opening balance.",
        tags=["Accounts"],
        request=AccountCreateSerializer,
        responses={201: AccountSerializer},
    ),
    retrieve=extend_schema(operation_id="get_account", summary="Get account", tags=["Accounts"]),
    update=extend_schema(
        operation_id="replace_account",
        summary="Update account",
        tags=["Accounts"],
        request=AccountUpdateSerializer,
        responses={200: AccountSerializer},
    ),
    partial_update=extend_schema(
        operation_id="update_account",
        summary="Update account",
        description="Edit name, type or currency. The balance is not writable.",
        tags=["Accounts"],
        request=AccountUpdateSerializer,
        responses={200: AccountSerializer},
    ),
    destroy=extend_schema(
        operation_id="delete_account",
        summary="Delete account",
        description="Refused with 409 while transactions or transfers reference the account.",
        tags=["Accounts"],
    ),
)
class AccountViewSet(OwnedRecordViewSet):
    """
    ViewSet for accounts.

    create:
        Open an account; opening_balance is posted through the balance engine.

    update / partial_update:
        Edit name, type or currency (both methods accept partial bodies).

    adjustments:
        Audit trail of balance changes, newest first.
    """

    model = Account
    serializer_class = AccountSerializer
    filterset_class = AccountFilter
    pagination_class = LedgerPagination

    def scope_queryset(self, queryset):
        return queryset.filter(member__user=self.request.user).select_related("member")

    def lookup_owned(self, pk):
        return OwnershipValidator.get_user_account(self.request.user, pk)

    def get_serializer_class(self):
        if self.action == "create":
            return AccountCreateSerializer
        if self.action in ("update", "partial_update"):
            return AccountUpdateSerializer
        if self.action == "adjustments":
            return BalanceAdjustmentSerializer
        return AccountSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = AccountService.open(request.user, **serializer.validated_data)
        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        account = self.get_object()
        serializer = AccountUpdateSerializer(account, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        account = serializer.save()
        return Response(AccountSerializer(account).data)

    @extend_schema(
        operation_id="list_account_adjustments",
        summary="List balance adjustments",
        tags=["Accounts"],
        responses={200: BalanceAdjustmentSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def adjustments(self, request, pk=None):
        account = self.get_object()
        queryset = account.adjustments.order_by("-created_at")

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = BalanceAdjustmentSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(BalanceAdjustmentSerializer(queryset, many=True).data)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_transactions", summary="List transactions", tags=["Transactions"]
    ),
    create=extend_schema(
        operation_id="create_transaction",
        summary="Post transaction",
        description="Post an income or expense and apply it to the account balance.",
        tags=["Transactions"],
        request=TransactionCreateSerializer,
        responses={201: TransactionSerializer},
    ),
    retrieve=extend_schema(
        operation_id="get_transaction", summary="Get transaction", tags=["Transactions"]
    ),
    update=extend_schema(
        operation_id="replace_transaction",
        summary="Update transaction",
        tags=["Transactions"],
        request=TransactionUpdateSerializer,
        responses={200: TransactionSerializer},
    ),
    partial_update=extend_schema(
        operation_id="update_transaction",
        summary="Update transaction",
        description=(
            "Reverse the old effect and apply the new one in one step. "
            "Rejected without changes if the new effect does not fit the balance."
        ),
        tags=["Transactions"],
        request=TransactionUpdateSerializer,
        responses={200: TransactionSerializer},
    ),
    destroy=extend_schema(
        operation_id="delete_transaction",
        summary="Delete transaction",
        description="Reverse the transaction's effect and remove it.",
        tags=["Transactions"],
    ),
)
class TransactionViewSet(viewsets.ModelViewSet):
    """ViewSet for income/expense transactions."""

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN
    filter_backends = [DjangoFilterBackend]
    filterset_class = TransactionFilter
    pagination_class = LedgerPagination

    def get_queryset(self):
        if not self.request.user.is_authenticated:
            return Transaction.objects.none()
        return TransactionService.list_for_user(self.request.user)

    def get_serializer_class(self):
        if self.action == "create":
            return TransactionCreateSerializer
        if self.action in ("update", "partial_update"):
            return TransactionUpdateSerializer
        return TransactionSerializer

    def get_object(self):
        return TransactionService.get(self.request.user, self.kwargs["pk"])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        txn = TransactionService.create(request.user, serializer.to_params())
        return Response(
            TransactionSerializer(TransactionService.get(request.user, txn.id)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        # PUT and PATCH share partial semantics
        serializer = TransactionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        txn = TransactionService.update(
            request.user, self.kwargs["pk"], serializer.to_changes()
        )
        return Response(TransactionSerializer(txn).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        TransactionService.delete(request.user, self.kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(operation_id="list_transfers", summary="List transfers", tags=["Transfers"]),
    create=extend_schema(
        operation_id="create_transfer",
        summary="Post transfer",
        description=(
            "Move money between two accounts of one member. "
            "The source is debited amount + fee; the destination is credited amount."
        ),
        tags=["Transfers"],
        request=TransferCreateSerializer,
        responses={201: TransferSerializer},
    ),
    retrieve=extend_schema(operation_id="get_transfer", summary="Get transfer", tags=["Transfers"]),
    destroy=extend_schema(
        operation_id="delete_transfer",
        summary="Delete transfer",
        description="Reverse both legs of the transfer and remove it.",
        tags=["Transfers"],
    ),
)
class TransferViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """ViewSet for transfers. Transfers cannot be edited; delete and re-post."""

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN
    filter_backends = [DjangoFilterBackend]
    filterset_class = TransferFilter
    pagination_class = LedgerPagination

    def get_queryset(self):
        if not self.request.user.is_authenticated:
            return Transfer.objects.none()
        return TransferService.list_for_user(self.request.user)

    def get_serializer_class(self):
        if self.action == "create":
            return TransferCreateSerializer
        return TransferSerializer

    def get_object(self):
        return TransferService.get(self.request.user, self.kwargs["pk"])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        transfer = TransferService.create(request.user, serializer.to_params())
        return Response(
            TransferSerializer(TransferService.get(request.user, transfer.id)).data,
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, *args, **kwargs):
        TransferService.delete(request.user, self.kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)
