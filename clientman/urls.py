from django.urls import path

from .views import (
    ClientDetailView,
    ClientListView,
    ClientRecalculateView,
    ClientSearchView,
)

app_name = "clientman"

urlpatterns = [
    path("clients/", ClientListView.as_view(), name="client-list"),
    path("clients/search/", ClientSearchView.as_view(), name="client-search"),
    path("clients/<uuid:client_id>/", ClientDetailView.as_view(), name="client-detail"),
    path(
        "clients/<uuid:client_id>/recalculate/",
        ClientRecalculateView.as_view(),
        name="client-recalculate",
    ),
]
