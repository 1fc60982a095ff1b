"""
SeaTrace API URLs.

Include this in your project's urlpatterns:

    path('api/seatrace/', include('seatrace.api.urls')),
"""

from rest_framework.routers import DefaultRouter

from .views import (
    LotViewSet,
    ProcessingBatchViewSet,
    ProductGradeViewSet,
    RawMaterialViewSet,
    SupplierViewSet,
)

router = DefaultRouter()
router.register("suppliers", SupplierViewSet)
router.register("grades", ProductGradeViewSet)
router.register("raw-materials", RawMaterialViewSet)
router.register("lots", LotViewSet)
router.register("batches", ProcessingBatchViewSet)

urlpatterns = router.urls
