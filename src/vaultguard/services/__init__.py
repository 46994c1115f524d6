from .access_requests import AccessRequest, AccessRequestService, RequestStatus
from .resources import create_resource
from .roles import assign_role, clearance_floor, delete_user
from .visibility import visible_resources

__all__ = [
    "AccessRequest",
    "AccessRequestService",
    "RequestStatus",
    "assign_role",
    "clearance_floor",
    "create_resource",
    "delete_user",
    "visible_resources",
]
