from django.contrib import admin
from django.urls import path

from dues_billing.adapters.observability.metrics import metrics

urlpatterns = [
    path('admin/', admin.site.urls),
    path('metrics/', metrics, name='metrics'),
]
