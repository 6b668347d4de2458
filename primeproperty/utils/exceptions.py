class NotFoundError(LookupError):
    """Requested record does not exist"""


class ForbiddenError(PermissionError):
    """Actor is authenticated but not allowed to touch the resource"""


class ConflictError(ValueError):
    """Write rejected by a uniqueness rule (duplicate favorite, taken email)"""
