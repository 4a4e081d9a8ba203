# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission, IsAuthenticated


# =========================================================
# ROLE CONSTANTS
# =========================================================
ROLE_SUPERADMIN = "superadmin"
ROLE_ADMIN = "admin"
ROLE_USER = "user"


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_INVENTORY_VIEW = "inventory.view"        # read movements, products, partners
CAP_CATALOG_EDIT = "catalog.edit"            # items, products, clients, providers
CAP_MOVEMENTS_EDIT = "movements.edit"        # entries, deliveries, their details
CAP_USERS_MANAGE = "users.manage"

ALL_CAPABILITIES = {
    CAP_INVENTORY_VIEW,
    CAP_CATALOG_EDIT,
    CAP_MOVEMENTS_EDIT,
    CAP_USERS_MANAGE,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_SUPERADMIN: {*ALL_CAPABILITIES},
    ROLE_ADMIN: {
        CAP_INVENTORY_VIEW,
        CAP_CATALOG_EDIT,
        CAP_MOVEMENTS_EDIT,
    },
    ROLE_USER: {
        CAP_INVENTORY_VIEW,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_MOVEMENTS_EDIT
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default to avoid accidental open endpoints
            return False

        return required in capabilities_for(user)


class CapabilityGatedMixin:
    """
    Reads need `read_capability`, everything else needs `write_capability`.

    Resolved per request so state never leaks between actions.
    """

    read_capability = CAP_INVENTORY_VIEW
    write_capability: Optional[str] = None
    required_capability: Optional[str] = None

    def get_permissions(self):
        if self.request.method in SAFE_METHODS:
            self.required_capability = self.read_capability
        else:
            self.required_capability = self.write_capability
        return [IsAuthenticated(), HasCapability()]


