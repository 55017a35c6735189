"""DRF permissions built on the organization viewer context."""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from agencies.viewer import resolve_viewer


class HasOrganization(BasePermission):
    """The user belongs to the requested (or a default) active organization."""

    message = "No organization available for this user."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return resolve_viewer(request) is not None


class CanViewReports(BasePermission):
    """Owners, admins and managers may read org-wide reports."""

    message = "Reports are restricted to owners, admins and managers."

    def has_permission(self, request, view):
        viewer = resolve_viewer(request)
        return bool(viewer and viewer.can_view_reports)


# ---------------------------------------------------------------------------
# Capability-aware permission base class
# ---------------------------------------------------------------------------

class _CapabilityPermission(BasePermission):
    """Reads need report access; writes also need ``capability``.

    Subclasses must set ``capability``.
    """

    capability = None

    def has_permission(self, request, view):
        viewer = resolve_viewer(request)
        if viewer is None or not viewer.can_view_reports:
            return False
        if request.method in SAFE_METHODS:
            return True
        return bool(self.capability) and viewer.has_capability(self.capability)


class CanWriteRoi(_CapabilityPermission):
    """Rates, comp plans and monthly inputs (or users with CAN_WRITE_ROI)."""
    capability = "CAN_WRITE_ROI"
    message = "You do not have permission to edit ROI setup."


class CanWriteBenchmarks(_CapabilityPermission):
    """Role expectations and person overrides (or users with CAN_WRITE_BENCHMARKS)."""
    capability = "CAN_WRITE_BENCHMARKS"
    message = "You do not have permission to edit benchmarks."


class CanManageSnapshots(_CapabilityPermission):
    capability = "CAN_MANAGE_SNAPSHOTS"
    message = "You do not have permission to save report snapshots."
