import asyncio
from typing import List

from backend.schema.utils.ddl_parser import parse_ddl_text, plan_tables, split_ddl_statements
from backend.schema.utils.ddl_errors import DDLTooLargeError, ScriptSplitError
from backend.schema.utils.ddl_types import SchemaPlan, TableDefinition
from backend.utils.config import get_settings
from backend.utils.logger import setup_logger


logger = setup_logger("table_service")


async def parse_ddl_service(ddl: str) -> TableDefinition:
    """
    단일 DDL을 파싱하는 서비스입니다.

    Raises:
        DDLTooLargeError: DDL이 DDL_MAX_LENGTH보다 긴 경우
        DDLParseError: DDL을 해석할 수 없는 경우
    """
    max_length = get_settings().ddl_max_length
    if len(ddl) > max_length:
        raise DDLTooLargeError(len(ddl), max_length)

    # CPU 바운드 작업이므로 executor에서 실행
    loop = asyncio.get_running_loop()
    table = await loop.run_in_executor(None, lambda: parse_ddl_text(ddl))

    logger.info("DDL 파싱 성공: %s (컬럼 %d개)", table.name, len(table.columns))
    return table


async def parse_multiple_ddl_service(ddls: List[str]) -> SchemaPlan:
    """
    여러 DDL을 파싱하고 테이블 생성 순서를 결정하는 서비스입니다.

    Raises:
        BatchParseError: 하나 이상의 DDL 파싱에 실패한 경우 (모든 오류 포함)
        DependencyError: 순환 의존 등으로 순서를 정할 수 없는 경우
    """
    logger.info("DDL %d개 파싱 요청", len(ddls))

    max_length = get_settings().ddl_max_length
    loop = asyncio.get_running_loop()
    plan = await loop.run_in_executor(None, lambda: plan_tables(ddls, max_length=max_length))

    logger.info("테이블 생성 순서: %s", " -> ".join(plan.order))
    return plan


async def parse_script_service(script: str) -> SchemaPlan:
    """
    세미콜론으로 구분된 DDL 스크립트를 문장 단위로 나눈 뒤 parse_multiple_ddl_service와 같이 처리합니다.

    Raises:
        ScriptSplitError: 스크립트를 나눌 수 없는 경우
    """
    loop = asyncio.get_running_loop()
    statements = await loop.run_in_executor(None, lambda: split_ddl_statements(script))
    if not statements:
        raise ScriptSplitError("No DDL statements found in script")

    logger.info("DDL 스크립트에서 문장 %d개 추출", len(statements))
    return await parse_multiple_ddl_service(statements)
