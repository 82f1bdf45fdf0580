"""
CREATE TABLE 문 파서
정규화 -> 쉼표 분할 -> 컬럼/제약 파서를 조합하여 TableDefinition을 만듭니다.
"""

import re
from typing import List, Tuple

from backend.schema.utils.ddl_errors import (
    InvalidConstraintError,
    MissingColumnBlockError,
    MissingTableNameError,
)
from backend.schema.utils.ddl_parsers.column_parser import parse_column
from backend.schema.utils.ddl_parsers.constraint_parser import (
    is_foreign_key_constraint,
    parse_foreign_key_constraint,
)
from backend.schema.utils.ddl_parsers.normalizer import normalize_ddl, split_by_comma
from backend.schema.utils.ddl_types import ColumnDefinition, ForeignKeyEdge, TableDefinition
from backend.utils.logger import setup_logger

logger = setup_logger("table_parser")

# 괄호 블록은 첫 '(' 부터 마지막 ')' 까지 (greedy)
COLUMN_BLOCK_PATTERN = re.compile(r'\(([\s\S]+)\)')


class TableParser:
    """CREATE TABLE 파서. 상태를 갖지 않으므로 인스턴스를 공유해도 됩니다."""

    def get_table_pattern(self) -> re.Pattern:
        """
        CREATE TABLE 패턴을 반환합니다.
        형식: CREATE TABLE [IF NOT EXISTS] ["']table["'] (
        """
        return re.compile(
            r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?["\']?(\w+)["\']?\s*\(',
            re.IGNORECASE
        )

    def parse_table_name(self, normalized_ddl: str) -> Tuple[str, int]:
        """
        테이블명을 추출합니다.

        Returns:
            (table_name, block_start) 튜플. block_start는 컬럼 블록의 '(' 위치

        Raises:
            MissingTableNameError: CREATE TABLE 패턴이 없는 경우
        """
        table_match = self.get_table_pattern().search(normalized_ddl)
        if not table_match:
            raise MissingTableNameError()
        return table_match.group(1), table_match.end() - 1

    def find_column_block(self, normalized_ddl: str, block_start: int) -> str:
        """
        컬럼 정의 블록을 찾아 반환합니다.

        block_start의 '(' 부터 문장의 마지막 ')' 까지를 블록으로 봅니다.
        닫는 괄호 뒤에 남은 ')'도 블록에 포함됩니다.

        Raises:
            MissingColumnBlockError: 비어 있지 않은 괄호 블록이 없는 경우
        """
        block_match = COLUMN_BLOCK_PATTERN.search(normalized_ddl, block_start)
        if not block_match:
            raise MissingColumnBlockError()
        return block_match.group(1)

    def parse_clauses(self, column_block: str) -> Tuple[List[ColumnDefinition], List[ForeignKeyEdge]]:
        """
        컬럼 정의 블록을 절 단위로 파싱합니다.

        외래 키는 소스에 선언된 순서대로 모읍니다.

        Raises:
            InvalidConstraintError: CONSTRAINT ... FOREIGN KEY 절의 형식이 잘못된 경우
        """
        columns: List[ColumnDefinition] = []
        foreign_keys: List[ForeignKeyEdge] = []

        for part in split_by_comma(column_block):
            clause = part.strip()

            # CONSTRAINT ... FOREIGN KEY
            if is_foreign_key_constraint(clause):
                fk = parse_foreign_key_constraint(clause)
                if fk is None:
                    raise InvalidConstraintError(clause)
                foreign_keys.append(fk)
                continue

            # 일반 컬럼 정의
            column = parse_column(clause)
            if column is None:
                logger.debug(f"컬럼으로 해석할 수 없는 절을 건너뜀: {clause!r}")
                continue

            columns.append(column)

            # 인라인 FOREIGN KEY
            if column.references is not None:
                foreign_keys.append(ForeignKeyEdge(column=column.name, references=column.references))

        return columns, foreign_keys

    def parse(self, ddl: str) -> TableDefinition:
        """
        CREATE TABLE 문을 파싱하여 테이블 정의를 반환합니다.

        Args:
            ddl: CREATE TABLE 문 하나

        Returns:
            TableDefinition

        Raises:
            MissingTableNameError: 테이블명을 찾지 못한 경우
            MissingColumnBlockError: 컬럼 정의 블록을 찾지 못한 경우
            InvalidConstraintError: 외래 키 제약을 해석하지 못한 경우
        """
        normalized_ddl = normalize_ddl(ddl)

        table_name, block_start = self.parse_table_name(normalized_ddl)
        column_block = self.find_column_block(normalized_ddl, block_start)
        columns, foreign_keys = self.parse_clauses(column_block)

        logger.debug(
            f"테이블 {table_name} 파싱 완료: 컬럼 {len(columns)}개, 외래 키 {len(foreign_keys)}개"
        )
        return TableDefinition(name=table_name, columns=columns, foreign_keys=foreign_keys)
