"""Resolve who is asking, and for which organization."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from agencies.capabilities import ALL_CAPABILITIES, REPORT_VIEWER_ROLES
from agencies.models import Organization, OrgMembership

# Sentinel for an ``org`` parameter that is not a UUID: matches no organization.
INVALID_ORG = object()


@dataclass(frozen=True)
class ViewerContext:
    organization: Organization
    role: str
    person_id: str | None = None
    capabilities: frozenset = field(default_factory=frozenset)

    @property
    def org_id(self):
        return self.organization.pk

    @property
    def is_owner(self) -> bool:
        return self.role == OrgMembership.Role.OWNER

    @property
    def is_admin(self) -> bool:
        return self.role == OrgMembership.Role.ADMIN

    @property
    def is_manager(self) -> bool:
        return self.role == OrgMembership.Role.MANAGER

    @property
    def can_view_reports(self) -> bool:
        return self.role in REPORT_VIEWER_ROLES

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities


def _requested_org_id(request):
    org_id = request.query_params.get("org")
    if not org_id:
        payload = getattr(request, "data", {}) or {}
        if isinstance(payload, dict):
            org_id = payload.get("org")
    if not org_id:
        return None
    try:
        return uuid.UUID(str(org_id))
    except ValueError:
        return INVALID_ORG


def resolve_viewer(request) -> ViewerContext | None:
    """Return the viewer context of ``request`` or ``None`` when it has no org.

    The organization comes from the ``org`` query/body parameter when given,
    otherwise from the user's default membership. Superusers may read any
    active organization with full capabilities.
    """
    cached = getattr(request, "_viewer_context", None)
    if cached is not None:
        return cached

    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        return None

    memberships = (
        OrgMembership.objects
        .filter(user=user, organization__is_active=True)
        .select_related("organization")
    )
    org_id = _requested_org_id(request)
    if org_id is INVALID_ORG:
        request._viewer_context = None
        return None
    if org_id:
        membership = memberships.filter(organization_id=org_id).first()
    else:
        membership = memberships.order_by("-is_default", "created_at").first()

    viewer = None
    if membership is not None:
        viewer = ViewerContext(
            organization=membership.organization,
            role=membership.role,
            person_id=str(membership.person_id) if membership.person_id else None,
            capabilities=frozenset(membership.get_effective_capabilities()),
        )
    elif user.is_superuser:
        qs = Organization.objects.filter(is_active=True)
        organization = qs.filter(pk=org_id).first() if org_id else qs.order_by("name").first()
        if organization is not None:
            viewer = ViewerContext(
                organization=organization,
                role=OrgMembership.Role.OWNER,
                capabilities=frozenset(ALL_CAPABILITIES),
            )

    request._viewer_context = viewer
    return viewer
