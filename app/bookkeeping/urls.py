"""
URL configuration for bookkeeping app.

Included in config/urls.py under /api/v1/.
"""

from rest_framework.routers import DefaultRouter

from bookkeeping.views import (
    AccountViewSet,
    CategoryViewSet,
    MemberViewSet,
    TransactionViewSet,
    TransferViewSet,
)

app_name = "bookkeeping"

router = DefaultRouter()
router.register("members", MemberViewSet, basename="member")
router.register("categories", CategoryViewSet, basename="category")
router.register("accounts", AccountViewSet, basename="account")
router.register("transactions", TransactionViewSet, basename="transaction")
router.register("transfers", TransferViewSet, basename="transfer")

urlpatterns = router.urls
