"""
Tables Router
DDL 파싱과 테이블 생성 순서 결정 엔드포인트
"""
from typing import Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from backend.dto.tables_dto import (
    ParseDDLRequest,
    ParseMultipleDDLRequest,
    ParseScriptRequest,
    ParseDDLResponse,
    SchemaPlanResponse,
    DDLItemErrorResponse,
)
from backend.schema.services.table_service import (
    parse_ddl_service,
    parse_multiple_ddl_service,
    parse_script_service,
)
from backend.schema.utils.ddl_errors import BatchParseError, DDLParseError, DependencyError
from backend.schema.utils.ddl_types import SchemaPlan
from backend.utils.logger import setup_logger


logger = setup_logger("tables_router")
router = APIRouter(prefix="/api/tables", tags=["tables"])


def _bad_request(response: Union[ParseDDLResponse, SchemaPlanResponse]) -> JSONResponse:
    return JSONResponse(status_code=400, content=response.model_dump(exclude_none=True))


def _plan_response(plan: SchemaPlan) -> SchemaPlanResponse:
    data = plan.to_dict()
    return SchemaPlanResponse(
        success=True,
        tables=data["tables"],
        order=data["order"],
        dependencies=data["dependencies"],
    )


def _batch_error_response(error: BatchParseError) -> JSONResponse:
    return _bad_request(
        SchemaPlanResponse(
            success=False,
            errors=[DDLItemErrorResponse(**item.to_dict()) for item in error.errors],
        )
    )


@router.post("/parse", response_model=ParseDDLResponse, response_model_exclude_none=True)
async def parse_ddl_api(request: ParseDDLRequest):
    """
    단일 DDL을 파싱하여 테이블 정의를 반환하는 엔드포인트입니다.
    """
    try:
        table = await parse_ddl_service(request.ddl)
        return ParseDDLResponse(success=True, table=table.to_dict())
    except DDLParseError as e:
        logger.error("Failed to parse DDL: %s", str(e))
        return _bad_request(ParseDDLResponse(success=False, error=str(e)))


@router.post("/parse-multiple", response_model=SchemaPlanResponse, response_model_exclude_none=True)
async def parse_multiple_ddl_api(request: ParseMultipleDDLRequest):
    """
    여러 DDL을 파싱하고 외래 키 의존성에 따라 생성 순서를 결정하는 엔드포인트입니다.
    하나라도 파싱에 실패하면 모든 오류를 모아 400으로 반환합니다.
    """
    try:
        plan = await parse_multiple_ddl_service(request.ddls)
        return _plan_response(plan)
    except BatchParseError as e:
        logger.error("Failed to parse %d DDL(s)", len(e.errors))
        return _batch_error_response(e)
    except DependencyError as e:
        logger.error("Failed to resolve table dependencies: %s", str(e))
        return _bad_request(SchemaPlanResponse(success=False, error=str(e)))


@router.post("/parse-script", response_model=SchemaPlanResponse, response_model_exclude_none=True)
async def parse_script_api(request: ParseScriptRequest):
    """
    세미콜론으로 구분된 DDL 스크립트를 문장 단위로 나누어 parse-multiple과 같이 처리하는 엔드포인트입니다.
    """
    try:
        plan = await parse_script_service(request.script)
        return _plan_response(plan)
    except BatchParseError as e:
        logger.error("Failed to parse %d DDL(s) in script", len(e.errors))
        return _batch_error_response(e)
    except (DDLParseError, DependencyError) as e:
        logger.error("Failed to process DDL script: %s", str(e))
        return _bad_request(SchemaPlanResponse(success=False, error=str(e)))


@router.get("/health")
async def health_api():
    """API 동작 확인"""
    return {"status": "ok", "message": "Tables API is working"}
