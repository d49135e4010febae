from django.urls import path

from .views import (
    AdminUserCountView,
    AdminUserListView,
    InstructorInfoView,
    LoginView,
    LogoutView,
    MyInfoView,
    ProfileView,
    ResendVerificationView,
    SignUpView,
    TokenRefreshView,
    VerifyEmailView,
)

urlpatterns = [
    path("auth/signup", SignUpView.as_view(), name="signup"),
    path("auth/signin", LoginView.as_view(), name="signin"),
    path("auth/logout", LogoutView.as_view(), name="logout"),
    path("auth/token-refresh", TokenRefreshView.as_view(), name="token-refresh"),
    path("auth/verify", VerifyEmailView.as_view(), name="verify-email"),
    path("auth/resend-verification", ResendVerificationView.as_view(), name="resend-verification"),
    path("student/me", MyInfoView.as_view(), name="my-info"),
    path("student/profile", ProfileView.as_view(), name="profile"),
    path("instructor/me", InstructorInfoView.as_view(), name="instructor-info"),
    path("admin/users", AdminUserListView.as_view(), name="admin-users"),
    path("admin/users/count", AdminUserCountView.as_view(), name="admin-users-count"),
]
