"""
DDL 파싱 모듈
CREATE TABLE 문을 파싱하여 테이블 정보를 추출하고, 테이블 생성 순서를 결정합니다.

**역할**
- 단일 DDL 파싱: parse_ddl_text()
- 여러 문장이 들어 있는 스크립트 분할: split_ddl_statements()
- DDL 파일 파싱: parse_ddl_file()
- 여러 DDL을 파싱하고 생성 순서까지 결정: plan_tables()
- tables_router / table_service에서 사용
"""

import re
from pathlib import Path
from typing import List, Optional

from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer, TokenType

from backend.schema.utils.ddl_errors import (
    BatchParseError,
    DDLParseError,
    DDLTooLargeError,
    ScriptSplitError,
)
from backend.schema.utils.ddl_parsers import TableParser, normalize_ddl
from backend.schema.utils.ddl_types import DDLItemError, SchemaPlan, TableDefinition
from backend.schema.utils.dependency_resolver import (
    build_dependency_map,
    resolve_table_dependencies,
)
from backend.utils.logger import setup_logger

logger = setup_logger("ddl_parser")

CREATE_TABLE_PATTERN = re.compile(r'CREATE\s+TABLE\b', re.IGNORECASE)

# 오류 응답에 포함할 DDL 미리보기 길이
DDL_PREVIEW_LENGTH = 100


class DDLParser:
    """
    DDL 파서 진입점
    TableParser와 의존성 해결을 하나의 인터페이스로 묶습니다.
    """

    def __init__(self, table_parser: Optional[TableParser] = None):
        self.table_parser = table_parser or TableParser()

    def parse(self, ddl: str) -> TableDefinition:
        """CREATE TABLE 문을 파싱하여 테이블 정의를 반환합니다."""
        return self.table_parser.parse(ddl)

    def resolve_table_dependencies(self, tables: List[TableDefinition]) -> List[str]:
        """여러 테이블 간의 의존 관계를 해결하여 생성 순서를 반환합니다."""
        return resolve_table_dependencies(tables)


_default_parser = DDLParser()


def parse_ddl_text(ddl: str) -> TableDefinition:
    """
    DDL 텍스트 하나를 파싱합니다.

    Raises:
        DDLParseError: 구조를 해석할 수 없는 경우
    """
    return _default_parser.parse(ddl)


def split_ddl_statements(script: str) -> List[str]:
    """
    여러 문장이 들어 있는 DDL 스크립트를 세미콜론 단위로 나눕니다.

    sqlglot 토크나이저를 사용하므로 문자열 리터럴이나 주석 안의 세미콜론에서는 나누지 않습니다.
    주석만 있는 조각은 버리고, 각 문장은 앞뒤 공백과 끝의 세미콜론 없이 반환합니다.

    Raises:
        ScriptSplitError: 스크립트를 토큰화할 수 없는 경우 (닫히지 않은 문자열 등)
    """
    try:
        tokens = Tokenizer().tokenize(script)
    except TokenError as e:
        raise ScriptSplitError(f"DDL 스크립트를 토큰화할 수 없습니다: {e}") from e

    statements: List[str] = []
    start = 0
    has_tokens = False

    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            if has_tokens:
                statements.append(script[start:token.start].strip())
            start = token.end + 1
            has_tokens = False
        else:
            has_tokens = True

    if has_tokens:
        statements.append(script[start:].strip())

    return statements


def parse_ddl_file(ddl_path: str) -> List[TableDefinition]:
    """
    DDL SQL 파일을 파싱하여 테이블 정의 목록을 반환합니다.

    CREATE TABLE이 아닌 문장(CREATE INDEX 등)은 건너뜁니다.

    Args:
        ddl_path: DDL SQL 파일 경로

    Returns:
        파일에 선언된 순서대로의 TableDefinition 목록

    Raises:
        FileNotFoundError: DDL 파일이 없는 경우
        DDLParseError: 문장을 해석할 수 없는 경우
    """
    if not Path(ddl_path).exists():
        raise FileNotFoundError(f"DDL file not found: {ddl_path}")

    logger.info(f"DDL 파일 발견: {ddl_path}")

    with open(ddl_path, 'r', encoding='utf-8') as f:
        ddl_text = f.read()

    tables: List[TableDefinition] = []
    for statement in split_ddl_statements(ddl_text):
        if not CREATE_TABLE_PATTERN.search(normalize_ddl(statement)):
            logger.info(f"CREATE TABLE이 아닌 문장 건너뜀: {preview_ddl(statement)}")
            continue
        tables.append(parse_ddl_text(statement))

    logger.info(f"테이블 {len(tables)}개 파싱 완료")
    return tables


def preview_ddl(ddl: str) -> str:
    """오류 메시지용 DDL 미리보기"""
    return ddl[:DDL_PREVIEW_LENGTH] + '...'


def plan_tables(ddls: List[str], max_length: Optional[int] = None) -> SchemaPlan:
    """
    여러 DDL을 각각 파싱하고 테이블 생성 순서를 결정합니다.

    하나라도 실패하면 첫 오류에서 멈추지 않고 모든 오류를 모아 BatchParseError로 던집니다.

    Args:
        ddls: CREATE TABLE 문 목록
        max_length: DDL 하나의 최대 길이. None이면 검사하지 않음

    Returns:
        생성 순서대로 정렬된 테이블, 순서, 의존 관계를 담은 SchemaPlan

    Raises:
        BatchParseError: 하나 이상의 DDL 파싱에 실패한 경우
        DependencyError: 순환 의존 등으로 순서를 정할 수 없는 경우
    """
    tables: List[TableDefinition] = []
    errors: List[DDLItemError] = []

    for ddl in ddls:
        try:
            if max_length is not None and len(ddl) > max_length:
                raise DDLTooLargeError(len(ddl), max_length)
            tables.append(parse_ddl_text(ddl))
        except DDLParseError as e:
            errors.append(DDLItemError(ddl=preview_ddl(ddl), error=str(e)))

    if errors:
        logger.info(f"DDL {len(ddls)}개 중 {len(errors)}개 파싱 실패")
        raise BatchParseError(errors)

    order = resolve_table_dependencies(tables)
    tables_by_name = {table.name: table for table in tables}

    return SchemaPlan(
        tables=[tables_by_name[name] for name in order],
        order=order,
        dependencies=build_dependency_map(tables),
    )
