# backend/utils/audit.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from models.log import Log

logger = logging.getLogger("openhouse.audit")

# Persist an audit entry and mirror it to the application log
def write_log(db: Session, *, user_id: Optional[str], action: str, resource: str,
              status: str = "SUCCESS", ip: Optional[str] = None, meta: Optional[Dict[str, Any]] = None):
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()
    logger.info("%s %s %s by %s from %s", action, resource, status, user_id or "-", ip or "-")

# Client address of a request, None when unavailable (e.g. some test transports)
def client_ip(request) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host
