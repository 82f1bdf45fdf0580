"""
DDL 파싱 및 의존성 해결 과정에서 발생하는 예외 정의
"""

from typing import List, Sequence

from backend.schema.utils.ddl_types import DDLItemError


class DDLParseError(ValueError):
    """DDL 문을 해석할 수 없는 경우 발생하는 예외의 기본 클래스"""
    pass


class MissingTableNameError(DDLParseError):
    """CREATE TABLE <name> ( 패턴을 찾지 못한 경우"""

    def __init__(self, message: str = "Invalid CREATE TABLE syntax: table name not found"):
        super().__init__(message)


class MissingColumnBlockError(DDLParseError):
    """테이블명 뒤에 괄호로 둘러싸인 컬럼 정의 블록이 없는 경우"""

    def __init__(self, message: str = "Invalid CREATE TABLE syntax: column definitions not found"):
        super().__init__(message)


class InvalidConstraintError(DDLParseError):
    """CONSTRAINT ... FOREIGN KEY 절의 형식이 올바르지 않은 경우"""

    def __init__(self, clause: str):
        self.clause = clause
        super().__init__(f"Invalid FOREIGN KEY constraint: {clause}")


class ScriptSplitError(DDLParseError):
    """DDL 스크립트를 문장 단위로 나눌 수 없는 경우"""
    pass


class DDLTooLargeError(DDLParseError):
    """DDL 길이가 설정된 최대값을 넘는 경우"""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"DDL is too large: {length} characters (limit {limit})")


class DependencyError(ValueError):
    """테이블 생성 순서를 결정할 수 없는 경우 발생하는 예외의 기본 클래스"""
    pass


class CircularDependencyError(DependencyError):
    """외래 키 그래프에 순환이 있는 경우"""

    def __init__(self, tables: Sequence[str]):
        self.tables = list(tables)
        super().__init__(
            "Circular dependency detected in table definitions: "
            + ", ".join(self.tables)
        )


class DuplicateTableError(CircularDependencyError):
    """같은 이름의 테이블 정의가 두 번 이상 주어져 전체 순서를 정할 수 없는 경우"""

    def __init__(self, table: str):
        self.table = table
        self.tables = [table]
        DependencyError.__init__(
            self,
            f"Circular dependency detected in table definitions: duplicate table {table}"
        )


class BatchParseError(Exception):
    """배치 파싱에서 하나 이상의 DDL이 실패한 경우. 모든 오류를 담습니다."""

    def __init__(self, errors: List[DDLItemError]):
        self.errors = errors
        super().__init__(f"{len(errors)}개의 DDL 파싱에 실패했습니다.")
