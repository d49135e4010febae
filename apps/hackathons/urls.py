from django.urls import path

from . import views

urlpatterns = [
    path("hackathons", views.HackathonListView.as_view(), name="hackathon-list"),
    path("hackathons/<int:pk>", views.HackathonDetailView.as_view(), name="hackathon-detail"),
    path("admin/hackathons", views.AdminHackathonCreateView.as_view(), name="admin-hackathon-create"),
    path("admin/hackathons/<int:pk>", views.AdminHackathonItemView.as_view(), name="admin-hackathon-item"),
]
