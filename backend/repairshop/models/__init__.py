from .tenancy import Store
from .auth import User, ROLE_OWNER, ROLE_STAFF, VALID_ROLES
from .customers import Customer
from .inventory import Supplier, InventoryItem, InventoryUpdateRequest, RequestStatus
from .repairs import Repair, OrderStatus, CoarseStatus

__all__ = [
    'Store',
    'User', 'ROLE_OWNER', 'ROLE_STAFF', 'VALID_ROLES',
    'Customer',
    'Supplier', 'InventoryItem', 'InventoryUpdateRequest', 'RequestStatus',
    'Repair', 'OrderStatus', 'CoarseStatus',
]
