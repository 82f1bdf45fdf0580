"""Schema services module"""

from backend.schema.services.table_service import (
    parse_ddl_service,
    parse_multiple_ddl_service,
    parse_script_service,
)

__all__ = [
    "parse_ddl_service",
    "parse_multiple_ddl_service",
    "parse_script_service",
]
