"""Staff portal JSON endpoints.

Thin wrappers over `accounts.services`: the same flows as the HTML
views, with portal errors mapped onto HTTP status codes.
"""
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts import services
from accounts.conf import get_store
from accounts.exceptions import (
    MissingFieldsError,
    ProfileConflictError,
    ProfileNotFoundError,
    StaffPortalError,
)
from accounts.session import SessionContext
from .serializers import (
    AuthOutcomeSerializer,
    LoginSerializer,
    RegistrationSerializer,
    SessionSerializer,
)

_STATUS_BY_ERROR = (
    (MissingFieldsError, status.HTTP_400_BAD_REQUEST),
    (ProfileNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProfileConflictError, status.HTTP_409_CONFLICT),
)


def _error_response(exc: StaffPortalError) -> Response:
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for klass, http_status in _STATUS_BY_ERROR:
        if isinstance(exc, klass):
            code = http_status
            break
    body = {"detail": exc.message, "code": exc.code}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    return Response(body, status=code)


@extend_schema(request=LoginSerializer, responses=AuthOutcomeSerializer)
@api_view(["POST"])
@permission_classes([AllowAny])
def staff_login(request):
    """Sign in by username or e-mail and set the session pointer."""
    ser = LoginSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data
    try:
        outcome = services.login(get_store(), SessionContext(request.session), data["username"], data["password"])
    except StaffPortalError as exc:
        return _error_response(exc)
    return Response(AuthOutcomeSerializer(outcome).data)


@extend_schema(request=RegistrationSerializer, responses={201: AuthOutcomeSerializer})
@api_view(["POST"])
@permission_classes([AllowAny])
def staff_register(request):
    """Create an incomplete staff profile and sign it in."""
    ser = RegistrationSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data
    try:
        outcome = services.register(
            get_store(),
            SessionContext(request.session),
            data["fullName"],
            data["email"],
            data["username"],
            data["password"],
        )
    except StaffPortalError as exc:
        return _error_response(exc)
    return Response(AuthOutcomeSerializer(outcome).data, status=status.HTTP_201_CREATED)


@extend_schema(responses=SessionSerializer)
@api_view(["GET", "DELETE"])
@permission_classes([AllowAny])
def staff_session(request):
    session = SessionContext(request.session)
    if request.method == "DELETE":
        session.clear()
        return Response(status=status.HTTP_204_NO_CONTENT)
    return Response(SessionSerializer({"userId": session.user_id}).data)
