from django.urls import path

from apps.courses import views

urlpatterns = [
    # 공개
    path("course/courses", views.CourseListView.as_view(), name="course-list"),
    path("course/courses/count", views.CourseCountView.as_view(), name="course-count"),
    path("course/courses/<slug:slug>", views.CourseDetailView.as_view(), name="course-detail"),
    path("course/skillpaths", views.SkillPathListView.as_view(), name="skillpath-list"),
    path("course/skillpaths/count", views.SkillPathCountView.as_view(), name="skillpath-count"),
    path("course/skillpaths/<slug:slug>", views.SkillPathDetailView.as_view(), name="skillpath-detail"),
    path("course/careerpaths", views.CareerPathListView.as_view(), name="careerpath-list"),
    path("course/careerpaths/count", views.CareerPathCountView.as_view(), name="careerpath-count"),
    path("course/careerpaths/<slug:slug>", views.CareerPathDetailView.as_view(), name="careerpath-detail"),
    # 관리자
    path("admin/course/courses", views.AdminCourseCreateView.as_view(), name="admin-course-create"),
    path("admin/course/courses/<int:pk>", views.AdminCourseItemView.as_view(), name="admin-course-item"),
    path("admin/course/skillpaths", views.AdminSkillPathCreateView.as_view(), name="admin-skillpath-create"),
    path("admin/course/skillpaths/<int:pk>", views.AdminSkillPathItemView.as_view(), name="admin-skillpath-item"),
    path("admin/course/careerpaths", views.AdminCareerPathCreateView.as_view(), name="admin-careerpath-create"),
    path("admin/course/careerpaths/<int:pk>", views.AdminCareerPathItemView.as_view(), name="admin-careerpath-item"),
]
