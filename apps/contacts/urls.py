from django.urls import path

from . import views

urlpatterns = [
    path("contacts", views.ContactCreateView.as_view(), name="contact-create"),
    path("admin/contacts", views.AdminContactListView.as_view(), name="admin-contact-list"),
    path("admin/contacts/<int:pk>", views.AdminContactItemView.as_view(), name="admin-contact-item"),
]
