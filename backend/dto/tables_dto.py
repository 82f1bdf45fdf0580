"""
Tables API DTO 정의
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ParseDDLRequest(BaseModel):
    """단일 DDL 파싱 요청"""
    ddl: str = Field(..., min_length=1, description="CREATE TABLE 문")


class ParseMultipleDDLRequest(BaseModel):
    """여러 DDL 파싱 요청"""
    ddls: List[str] = Field(..., min_length=1, description="CREATE TABLE 문 목록")


class ParseScriptRequest(BaseModel):
    """세미콜론으로 구분된 DDL 스크립트 파싱 요청"""
    script: str = Field(..., min_length=1, description="DDL 스크립트")


class DDLItemErrorResponse(BaseModel):
    """개별 DDL 파싱 오류"""
    ddl: str
    error: str


class ParseDDLResponse(BaseModel):
    """단일 DDL 파싱 응답"""
    success: bool
    table: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class SchemaPlanResponse(BaseModel):
    """여러 DDL 파싱 및 생성 순서 응답"""
    success: bool
    tables: Optional[List[Dict[str, Any]]] = None
    order: Optional[List[str]] = None
    dependencies: Optional[Dict[str, List[str]]] = None
    error: Optional[str] = None
    errors: Optional[List[DDLItemErrorResponse]] = None
