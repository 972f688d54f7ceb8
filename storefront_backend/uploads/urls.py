# uploads/urls.py

from django.urls import re_path

from .views import UploadView

urlpatterns = [
    re_path(r"^upload/?$", UploadView.as_view(), name="upload"),
]
