from django.urls import path

from .views import FileUploadView, PingView

urlpatterns = [
    path("ping", PingView.as_view(), name="ping"),
    path("upload", FileUploadView.as_view(), name="file-upload"),
]
