"""
DDL 파서 모듈
CREATE TABLE 문을 구성 요소별로 파싱하는 로직을 담고 있습니다.
"""

from backend.schema.utils.ddl_parsers.normalizer import normalize_ddl, split_by_comma
from backend.schema.utils.ddl_parsers.column_parser import parse_column
from backend.schema.utils.ddl_parsers.constraint_parser import (
    is_foreign_key_constraint,
    parse_foreign_key_constraint,
)
from backend.schema.utils.ddl_parsers.table_parser import TableParser

__all__ = [
    'normalize_ddl',
    'split_by_comma',
    'parse_column',
    'is_foreign_key_constraint',
    'parse_foreign_key_constraint',
    'TableParser',
]
