# autevo/schemas/audit.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime


class AuditLogEntry(BaseModel):
    id: str
    user_id: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    old_value: Optional[Dict[str, Any]] = None
    new_value: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
