from rest_framework import permissions


class IsSeller(permissions.BasePermission):
    message = "Access is restricted to sellers only."

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, "role", None) == "seller"
        )


class IsOwnerOrReadOnly(permissions.BasePermission):
    """
    Allows only its owner to modify the object.
    SAFE_METHODS may still be cut off by other permissions (IsSeller).
    """
    message = "Only the owner can modify this object."

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        owner_id = getattr(obj, "owner_id", None)
        if owner_id is None:
            owner_id = getattr(obj, "user_id", None)
        return owner_id == getattr(request.user, "id", None)
