"""Capability constants for organization memberships.

A membership either lists capabilities explicitly or inherits the defaults of
its access level from ``ROLE_CAPABILITY_MAP``.
"""

CAPABILITY_CHOICES = [
    ("CAN_VIEW_REPORTS", "Can view ROI and benchmark reports"),
    ("CAN_WRITE_ROI", "Can edit commission rates, comp plans and monthly inputs"),
    ("CAN_WRITE_BENCHMARKS", "Can edit role expectations and person overrides"),
    ("CAN_MANAGE_SNAPSHOTS", "Can save report snapshots"),
]

ALL_CAPABILITIES = [code for code, _ in CAPABILITY_CHOICES]

# Access level -> default capabilities (fallback when capabilities=[])
ROLE_CAPABILITY_MAP = {
    "OWNER": list(ALL_CAPABILITIES),
    "ADMIN": list(ALL_CAPABILITIES),
    "MANAGER": ["CAN_VIEW_REPORTS", "CAN_MANAGE_SNAPSHOTS"],
    "MEMBER": [],
}

# Access levels allowed to read org-wide reports at all.
REPORT_VIEWER_ROLES = ("OWNER", "ADMIN", "MANAGER")
