"""
DDL 텍스트 정규화 및 최상위 쉼표 분할
"""

import re
from typing import List

LINE_COMMENT_PATTERN = re.compile(r'--.*$', re.MULTILINE)
BLOCK_COMMENT_PATTERN = re.compile(r'/\*[\s\S]*?\*/')
WHITESPACE_PATTERN = re.compile(r'\s+')


def normalize_ddl(ddl: str) -> str:
    """
    DDL 문을 정규화합니다. (주석 제거, 공백 통일)

    - 행 주석(-- ...) 제거
    - 블록 주석(/* ... */) 제거, 여러 줄에 걸쳐도 됨
    - 연속된 공백과 개행을 공백 하나로 치환
    - 앞뒤 공백 제거
    """
    text = LINE_COMMENT_PATTERN.sub('', ddl)
    text = BLOCK_COMMENT_PATTERN.sub('', text)
    text = WHITESPACE_PATTERN.sub(' ', text)
    return text.strip()


def split_by_comma(text: str) -> List[str]:
    """
    쉼표로 분할합니다. 괄호 안의 쉼표는 무시합니다.

    예:
        "id INT, price NUMERIC(10,2)" -> ["id INT", " price NUMERIC(10,2)"]

    마지막 조각은 공백이 아닐 때만 포함되며, 각 조각은 trim하지 않고 반환합니다.
    """
    parts: List[str] = []
    current: List[str] = []
    depth = 0

    for char in text:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        elif char == ',' and depth == 0:
            parts.append(''.join(current))
            current = []
            continue

        current.append(char)

    last = ''.join(current)
    if last.strip():
        parts.append(last)

    return parts
