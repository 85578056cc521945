# autevo/db/models/__init__.py
from autevo.db.models.tenant import Tenant
from autevo.db.models.user import User, UserStatus, PendingInvite
from autevo.db.models.customer import Customer
from autevo.db.models.vehicle import Vehicle
from autevo.db.models.service import Service
from autevo.db.models.service_order import ServiceOrder, OrderItem, Payment, DiscountType, PaymentMethod
from autevo.db.models.audit_log import AuditLog

__all__ = [
    "Tenant", "User", "UserStatus", "PendingInvite", "Customer", "Vehicle", "Service",
    "ServiceOrder", "OrderItem", "Payment", "DiscountType", "PaymentMethod", "AuditLog",
]
