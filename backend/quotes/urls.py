from rest_framework.routers import DefaultRouter

from .views import QuotationViewSet

router = DefaultRouter()
router.register(r'quotes', QuotationViewSet, basename='quotes')

urlpatterns = router.urls
