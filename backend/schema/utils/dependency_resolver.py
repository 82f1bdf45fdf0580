"""
테이블 간 외래 키 의존성 해결
참조되는 테이블이 먼저 생성되도록 생성 순서를 결정합니다.
"""

from collections import deque
from typing import Deque, Dict, List

from backend.schema.utils.ddl_errors import CircularDependencyError, DuplicateTableError
from backend.schema.utils.ddl_types import TableDefinition
from backend.utils.logger import setup_logger

logger = setup_logger("dependency_resolver")


def resolve_table_dependencies(tables: List[TableDefinition]) -> List[str]:
    """
    여러 테이블 간의 의존 관계를 해결하여 생성 순서를 반환합니다.

    Kahn 알고리즘을 사용하며, 간선은 "참조되는 테이블 -> 참조하는 테이블" 방향입니다.
    - 자기 참조(parent_id 등)는 그래프에서 제외합니다.
    - 같은 두 테이블 사이의 간선이 여러 개여도 각각 진입 차수에 더해집니다.
    - 입력에 없는 테이블을 참조하면 진입 차수만 늘어나므로 순환 의존으로 보고됩니다.
    - 큐의 초기 순서와 간선 순서는 입력 순서를 따르므로 결과가 결정적입니다.

    Args:
        tables: 파싱된 테이블 정의 목록

    Returns:
        생성 순서대로 정렬된 테이블명 목록

    Raises:
        CircularDependencyError: 순환 의존이 있는 경우 (같은 이름의 테이블이 두 번 이상 있으면 DuplicateTableError)
    """
    graph: Dict[str, List[str]] = {}
    in_degree: Dict[str, int] = {}

    # 그래프 구축
    for table in tables:
        if table.name in graph:
            raise DuplicateTableError(table.name)
        graph[table.name] = []
        in_degree[table.name] = 0

    for table in tables:
        for fk in table.foreign_keys:
            referenced = fk.references.table
            if referenced == table.name:  # 자기 참조 제외
                continue
            if referenced in graph:
                graph[referenced].append(table.name)
            in_degree[table.name] += 1

    # 위상 정렬 (Kahn's Algorithm)
    queue: Deque[str] = deque(name for name, degree in in_degree.items() if degree == 0)
    result: List[str] = []

    while queue:
        current = queue.popleft()
        result.append(current)

        for dependent in graph[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    # 순환 의존 검사
    if len(result) != len(tables):
        remaining = [name for name in graph if name not in result]
        logger.warning(f"순환 의존 감지: {', '.join(remaining)}")
        raise CircularDependencyError(remaining)

    return result


def build_dependency_map(tables: List[TableDefinition]) -> Dict[str, List[str]]:
    """
    테이블별로 참조하는 테이블 목록을 반환합니다.

    자기 참조는 제외하고, 같은 테이블을 여러 번 참조해도 한 번만 포함합니다.
    """
    return {table.name: table.referenced_tables for table in tables}
