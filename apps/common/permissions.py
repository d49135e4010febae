from rest_framework.permissions import BasePermission


class HasRole(BasePermission):
    """토큰 사용자의 역할(role)로 접근을 제한하는 권한의 기본 클래스.

    admin 역할은 모든 영역에 접근할 수 있다.

    Attributes:
        role (str): 허용할 역할.
        message (str): 권한 거부 시 반환할 메시지.
    """

    role = None
    message = "You do not have access to this area."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role == "admin" or user.role == self.role


class IsStudent(HasRole):
    role = "student"
    message = "Only students can access this resource."


class IsInstructor(HasRole):
    role = "instructor"
    message = "Only instructors can access this resource."


class IsAdminRole(HasRole):
    role = "admin"
    message = "Only admins can access this resource."
