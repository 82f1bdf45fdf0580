import pytest

from backend.schema.utils.ddl_errors import BatchParseError, CircularDependencyError, ScriptSplitError
from backend.schema.utils.ddl_parser import (
    parse_ddl_file,
    plan_tables,
    split_ddl_statements,
)


class TestSplitDDLStatements:
    def test_splits_on_semicolons(self):
        script = "CREATE TABLE a (id INT);\nCREATE TABLE b (id INT);"
        assert split_ddl_statements(script) == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]

    def test_last_statement_without_semicolon(self):
        assert split_ddl_statements("CREATE TABLE a (id INT); CREATE TABLE b (id INT)") == [
            "CREATE TABLE a (id INT)",
            "CREATE TABLE b (id INT)",
        ]

    def test_semicolon_inside_string_literal(self):
        script = "CREATE TABLE a (note TEXT DEFAULT 'x;y'); CREATE TABLE b (id INT);"
        statements = split_ddl_statements(script)
        assert len(statements) == 2
        assert statements[0] == "CREATE TABLE a (note TEXT DEFAULT 'x;y')"

    def test_comment_only_chunks_are_dropped(self):
        script = "CREATE TABLE a (id INT);\n-- trailing comment\n;;"
        assert split_ddl_statements(script) == ["CREATE TABLE a (id INT)"]

    def test_empty_script(self):
        assert split_ddl_statements("") == []

    def test_unterminated_string(self):
        with pytest.raises(ScriptSplitError):
            split_ddl_statements("CREATE TABLE a (note TEXT DEFAULT 'oops)")


class TestParseDDLFile:
    def test_parses_create_table_statements(self, tmp_path):
        ddl_file = tmp_path / "schema.sql"
        ddl_file.write_text(
            "-- schema\n"
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL);\n"
            "CREATE INDEX idx_users_name ON users (name);\n"
            "CREATE TABLE posts (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id));\n",
            encoding="utf-8",
        )
        tables = parse_ddl_file(str(ddl_file))
        assert [t.name for t in tables] == ["users", "posts"]
        assert tables[1].foreign_keys[0].references.table == "users"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_ddl_file(str(tmp_path / "missing.sql"))


class TestPlanTables:
    def test_plan(self):
        plan = plan_tables([
            "CREATE TABLE posts (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users(id))",
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)",
            "CREATE TABLE comments (id INTEGER PRIMARY KEY, post_id INTEGER REFERENCES posts(id))",
        ])
        assert plan.order == ["users", "posts", "comments"]
        assert [t.name for t in plan.tables] == ["users", "posts", "comments"]
        assert plan.dependencies == {"posts": ["users"], "users": [], "comments": ["posts"]}

        data = plan.to_dict()
        assert [(t["name"], t["order"]) for t in data["tables"]] == [
            ("users", 1),
            ("posts", 2),
            ("comments", 3),
        ]

    def test_collects_every_error(self):
        with pytest.raises(BatchParseError) as exc_info:
            plan_tables(["INVALID SQL", "CREATE TABLE ok (id INT)", "CREATE TABLE"])

        errors = exc_info.value.errors
        assert len(errors) == 2
        assert errors[0].ddl == "INVALID SQL..."
        assert "table name not found" in errors[0].error
        assert errors[1].ddl == "CREATE TABLE..."

    def test_error_preview_is_truncated(self):
        ddl = "INVALID " + "x" * 200
        with pytest.raises(BatchParseError) as exc_info:
            plan_tables([ddl])
        assert exc_info.value.errors[0].ddl == ddl[:100] + "..."

    def test_max_length(self):
        with pytest.raises(BatchParseError) as exc_info:
            plan_tables(["CREATE TABLE t (id INT)"], max_length=5)
        assert "too large" in exc_info.value.errors[0].error

    def test_cycle_is_raised_after_parsing(self):
        with pytest.raises(CircularDependencyError):
            plan_tables([
                "CREATE TABLE a (id INT, b_id INT REFERENCES b(id))",
                "CREATE TABLE b (id INT, a_id INT REFERENCES a(id))",
            ])

    def test_reference_outside_batch_fails_plan(self):
        with pytest.raises(CircularDependencyError, match="Circular dependency"):
            plan_tables(["CREATE TABLE orders (id INT, customer_id INT REFERENCES customers(id))"])
