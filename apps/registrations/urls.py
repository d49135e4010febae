from django.urls import path

from .views import EnrollmentView, MyEnrollmentListView

urlpatterns = [
    path("enrollments", EnrollmentView.as_view(), name="enrollments"),
    path("student/enrollments", MyEnrollmentListView.as_view(), name="my-enrollments"),
]
