from contextvars import ContextVar
from typing import Optional

# Set by the transport layer; attached to DDL spans when present.
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
