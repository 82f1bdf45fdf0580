"""
단일 컬럼 정의 파서
"""

import re
from typing import Optional

from backend.schema.utils.ddl_types import ColumnDefinition, ForeignKeyTarget

# 컬럼명(따옴표 허용)과 타입. 타입은 NUMERIC(10,2)처럼 괄호 인자를 가질 수 있음
COLUMN_PATTERN = re.compile(r'^["\']?(\w+)["\']?\s+(\w+(?:\([^)]+\))?)', re.IGNORECASE)
NOT_NULL_PATTERN = re.compile(r'NOT\s+NULL', re.IGNORECASE)
PRIMARY_KEY_PATTERN = re.compile(r'PRIMARY\s+KEY', re.IGNORECASE)
UNIQUE_PATTERN = re.compile(r'UNIQUE', re.IGNORECASE)
DEFAULT_PATTERN = re.compile(r'DEFAULT\s+(.+?)(?:\s+|$)', re.IGNORECASE)
REFERENCES_PATTERN = re.compile(
    r'REFERENCES\s+["\']?(\w+)["\']?\s*\(["\']?(\w+)["\']?\)',
    re.IGNORECASE
)


def parse_default_value(column_def: str) -> Optional[str]:
    """
    DEFAULT 뒤의 값을 다음 공백까지 추출하고 앞뒤 따옴표를 제거합니다.

    예:
        theme TEXT DEFAULT 'light' -> light
        count INTEGER DEFAULT 0 -> 0

    공백이 들어간 문자열 리터럴('a b')은 첫 공백에서 잘립니다.
    """
    default_match = DEFAULT_PATTERN.search(column_def)
    if not default_match:
        return None
    return default_match.group(1).strip('\'"')


def parse_references(column_def: str) -> Optional[ForeignKeyTarget]:
    """인라인 REFERENCES table(column)을 찾아 반환합니다. 첫 번째 것만 사용합니다."""
    references_match = REFERENCES_PATTERN.search(column_def)
    if not references_match:
        return None
    return ForeignKeyTarget(
        table=references_match.group(1),
        column=references_match.group(2)
    )


def parse_column(column_def: str) -> Optional[ColumnDefinition]:
    """
    단일 컬럼 정의를 파싱합니다.

    각 플래그는 절 전체에 대한 독립적인 검사이며 순서와 무관합니다.

    Args:
        column_def: trim된 컬럼 정의 절 (예: "email TEXT UNIQUE NOT NULL")

    Returns:
        ColumnDefinition, 컬럼명과 타입을 찾지 못하면 None
    """
    match = COLUMN_PATTERN.match(column_def)
    if not match:
        return None

    name, col_type = match.group(1), match.group(2)

    return ColumnDefinition(
        name=name,
        type=col_type,
        nullable=not NOT_NULL_PATTERN.search(column_def),
        primary_key=bool(PRIMARY_KEY_PATTERN.search(column_def)),
        unique=bool(UNIQUE_PATTERN.search(column_def)),
        default_value=parse_default_value(column_def),
        references=parse_references(column_def),
    )
