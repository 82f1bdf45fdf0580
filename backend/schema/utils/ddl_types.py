"""
DDL 파싱에 사용되는 데이터 타입 정의
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ForeignKeyTarget:
    """외래 키가 가리키는 테이블과 컬럼"""
    table: str
    column: str

    def to_dict(self) -> Dict[str, str]:
        return {"table": self.table, "column": self.column}


@dataclass(frozen=True)
class ForeignKeyEdge:
    """Foreign Key 정보를 담는 데이터클래스"""
    column: str
    references: ForeignKeyTarget

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "references": self.references.to_dict()}


@dataclass(frozen=True)
class ColumnDefinition:
    """컬럼 정보를 담는 데이터클래스"""
    name: str
    type: str  # 원본 DB 타입 (예: VARCHAR(255))
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    default_value: Optional[str] = None
    references: Optional[ForeignKeyTarget] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        API 응답용 dict로 변환합니다.
        값이 없는 defaultValue, references 키는 생략합니다.
        """
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
            "primaryKey": self.primary_key,
            "unique": self.unique,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.references is not None:
            data["references"] = self.references.to_dict()
        return data


@dataclass(frozen=True)
class TableDefinition:
    """테이블 정보를 담는 데이터클래스"""
    name: str  # 테이블명
    columns: List[ColumnDefinition] = field(default_factory=list)
    foreign_keys: List[ForeignKeyEdge] = field(default_factory=list)

    @property
    def referenced_tables(self) -> List[str]:
        """자기 참조를 제외한, 이 테이블이 참조하는 테이블명 목록 (중복 제거, 선언 순서)"""
        seen: List[str] = []
        for fk in self.foreign_keys:
            ref = fk.references.table
            if ref != self.name and ref not in seen:
                seen.append(ref)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_dict() for col in self.columns],
            "foreignKeys": [fk.to_dict() for fk in self.foreign_keys],
        }


@dataclass(frozen=True)
class DDLItemError:
    """배치 파싱 중 개별 DDL에서 발생한 오류"""
    ddl: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"ddl": self.ddl, "error": self.error}


@dataclass(frozen=True)
class SchemaPlan:
    """
    여러 DDL을 파싱하고 생성 순서를 결정한 결과

    tables는 생성 순서대로 정렬되어 있습니다.
    """
    tables: List[TableDefinition]
    order: List[str]
    dependencies: Dict[str, List[str]]

    def to_dict(self) -> Dict[str, Any]:
        ordered_tables = []
        for index, table in enumerate(self.tables):
            data = table.to_dict()
            data["order"] = index + 1
            ordered_tables.append(data)
        return {
            "tables": ordered_tables,
            "order": list(self.order),
            "dependencies": {name: list(refs) for name, refs in self.dependencies.items()},
        }
