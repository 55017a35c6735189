"""ViewSets and API views for organization lookups and the current viewer."""
import logging

from rest_framework import filters, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from django_filters.rest_framework import DjangoFilterBackend

from agencies.models import LineOfBusiness, OrgRole, Person
from agencies.viewer import resolve_viewer
from api.v1.permissions import CanViewReports, HasOrganization
from api.v1.serializers import LineOfBusinessSerializer, OrgRoleSerializer, PersonSerializer

logger = logging.getLogger("salesroi")


class _OrgScopedViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only list/detail restricted to the viewer's organization."""

    permission_classes = [IsAuthenticated, HasOrganization, CanViewReports]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]

    def get_queryset(self):
        viewer = resolve_viewer(self.request)
        return super().get_queryset().filter(organization=viewer.organization)


class PersonViewSet(_OrgScopedViewSet):
    serializer_class = PersonSerializer
    queryset = Person.objects.select_related("role")
    filterset_fields = ["is_active", "role"]
    search_fields = ["full_name"]
    ordering_fields = ["full_name", "created_at"]


class OrgRoleViewSet(_OrgScopedViewSet):
    serializer_class = OrgRoleSerializer
    queryset = OrgRole.objects.select_related("expectation")
    search_fields = ["name"]
    ordering_fields = ["name"]


class LineOfBusinessViewSet(_OrgScopedViewSet):
    serializer_class = LineOfBusinessSerializer
    queryset = LineOfBusiness.objects.all()
    filterset_fields = ["premium_category"]
    search_fields = ["name"]
    ordering_fields = ["name"]


class MeView(APIView):
    """GET /api/v1/auth/me/  current user, organization, role and capabilities."""

    permission_classes = [IsAuthenticated, HasOrganization]

    def get(self, request):
        viewer = resolve_viewer(request)
        user = request.user
        return Response({
            "id": str(user.pk),
            "email": user.email,
            "name": user.get_full_name(),
            "organization": {
                "id": str(viewer.org_id),
                "name": viewer.organization.name,
                "code": viewer.organization.code,
            },
            "role": viewer.role,
            "personId": str(viewer.person_id) if viewer.person_id else None,
            "capabilities": sorted(viewer.capabilities),
            "canViewReports": viewer.can_view_reports,
        })
