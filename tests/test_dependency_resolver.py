import pytest

from backend.schema.utils.ddl_errors import (
    CircularDependencyError,
    DependencyError,
    DuplicateTableError,
)
from backend.schema.utils.ddl_parser import parse_ddl_text
from backend.schema.utils.dependency_resolver import (
    build_dependency_map,
    resolve_table_dependencies,
)


def parse_all(*ddls):
    return [parse_ddl_text(ddl) for ddl in ddls]


def test_orders_referenced_tables_first():
    tables = parse_all(
        "CREATE TABLE posts (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id))",
        "CREATE TABLE users (id INTEGER PRIMARY KEY)",
        "CREATE TABLE comments (id INTEGER PRIMARY KEY, post_id INTEGER REFERENCES posts(id))",
    )
    assert resolve_table_dependencies(tables) == ["users", "posts", "comments"]


def test_detects_cycle():
    tables = parse_all(
        "CREATE TABLE a (id INTEGER PRIMARY KEY, b_id INTEGER REFERENCES b(id))",
        "CREATE TABLE b (id INTEGER PRIMARY KEY, a_id INTEGER REFERENCES a(id))",
    )
    with pytest.raises(CircularDependencyError, match="Circular dependency"):
        resolve_table_dependencies(tables)


def test_cycle_error_names_only_the_blocked_tables():
    tables = parse_all(
        "CREATE TABLE roots (id INT)",
        "CREATE TABLE a (id INT, b_id INT REFERENCES b(id), root_id INT REFERENCES roots(id))",
        "CREATE TABLE b (id INT, a_id INT REFERENCES a(id))",
    )
    with pytest.raises(CircularDependencyError) as exc_info:
        resolve_table_dependencies(tables)
    assert exc_info.value.tables == ["a", "b"]
    assert isinstance(exc_info.value, DependencyError)


def test_self_reference_is_not_a_cycle():
    tables = parse_all(
        "CREATE TABLE categories (id INTEGER PRIMARY KEY, parent_id INTEGER REFERENCES categories(id))"
    )
    assert resolve_table_dependencies(tables) == ["categories"]
    assert build_dependency_map(tables) == {"categories": []}


def test_parallel_edges_between_same_tables():
    tables = parse_all(
        "CREATE TABLE messages (id INT, sender_id INT REFERENCES users(id), receiver_id INT REFERENCES users(id))",
        "CREATE TABLE users (id INT)",
    )
    assert resolve_table_dependencies(tables) == ["users", "messages"]


def test_reference_outside_batch_is_reported_as_cycle():
    tables = parse_all(
        "CREATE TABLE users (id INT)",
        "CREATE TABLE orders (id INT, customer_id INT REFERENCES customers(id))",
    )
    with pytest.raises(CircularDependencyError, match="Circular dependency") as exc_info:
        resolve_table_dependencies(tables)
    assert exc_info.value.tables == ["orders"]


def test_independent_tables_keep_input_order():
    tables = parse_all(
        "CREATE TABLE b (id INT)",
        "CREATE TABLE a (id INT)",
        "CREATE TABLE c (id INT)",
    )
    assert resolve_table_dependencies(tables) == ["b", "a", "c"]


def test_edges_are_released_in_insertion_order():
    tables = parse_all(
        "CREATE TABLE d (id INT, b_id INT REFERENCES b(id), c_id INT REFERENCES c(id))",
        "CREATE TABLE c (id INT, a_id INT REFERENCES a(id))",
        "CREATE TABLE b (id INT, a_id INT REFERENCES a(id))",
        "CREATE TABLE a (id INT)",
    )
    assert resolve_table_dependencies(tables) == ["a", "c", "b", "d"]


def test_duplicate_table_names():
    tables = parse_all("CREATE TABLE users (id INT)", "CREATE TABLE users (id INT, name TEXT)")
    with pytest.raises(DuplicateTableError, match="Circular dependency") as exc_info:
        resolve_table_dependencies(tables)
    assert isinstance(exc_info.value, CircularDependencyError)
    assert exc_info.value.table == "users"


def test_empty_input():
    assert resolve_table_dependencies([]) == []


def test_dependency_map_is_distinct_and_excludes_self():
    tables = parse_all(
        """
        CREATE TABLE posts (
          id INT,
          author_id INT REFERENCES users(id),
          editor_id INT REFERENCES users(id),
          parent_id INT REFERENCES posts(id),
          CONSTRAINT fk_topic FOREIGN KEY (topic_id) REFERENCES topics(id)
        )
        """,
        "CREATE TABLE users (id INT)",
    )
    assert build_dependency_map(tables) == {"posts": ["users", "topics"], "users": []}
