"""
테이블 레벨 CONSTRAINT ... FOREIGN KEY 파서
"""

import re
from typing import Optional

from backend.schema.utils.ddl_types import ForeignKeyEdge, ForeignKeyTarget

CONSTRAINT_FK_PATTERN = re.compile(r'^CONSTRAINT\s+\w+\s+FOREIGN\s+KEY', re.IGNORECASE)
FOREIGN_KEY_PATTERN = re.compile(
    r'FOREIGN\s+KEY\s*\(["\']?(\w+)["\']?\)\s+REFERENCES\s+["\']?(\w+)["\']?\s*\(["\']?(\w+)["\']?\)',
    re.IGNORECASE
)


def is_foreign_key_constraint(clause: str) -> bool:
    """절이 CONSTRAINT <name> FOREIGN KEY 로 시작하는지 확인합니다."""
    return bool(CONSTRAINT_FK_PATTERN.match(clause))


def parse_foreign_key_constraint(constraint: str) -> Optional[ForeignKeyEdge]:
    """
    FOREIGN KEY 제약을 파싱합니다.

    형식: CONSTRAINT fk_post FOREIGN KEY (post_id) REFERENCES posts(id)

    Returns:
        ForeignKeyEdge, 형식이 맞지 않으면 None
    """
    match = FOREIGN_KEY_PATTERN.search(constraint)
    if not match:
        return None

    return ForeignKeyEdge(
        column=match.group(1),
        references=ForeignKeyTarget(table=match.group(2), column=match.group(3))
    )
