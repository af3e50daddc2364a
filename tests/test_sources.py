"""
Tests for schema and statistics sources.
"""

import json

import pytest

from metadata_provider import (
    DictSchemaSource,
    FileSchemaSource,
    FileStatsSource,
    InlineSchemaSource,
    ProviderConfig,
    SchemaParseError,
    StaticSchemaSource,
    StaticStatsSource,
    StatisticsParseError,
    TableHandle,
    TableSchema,
    TableStatistics,
)


class TestStaticSources:
    """Tests for in-memory sources."""

    def test_absent_values(self):
        """Test that sources may hold nothing."""
        assert StaticSchemaSource(None).get() is None
        assert StaticStatsSource(None).get() is None

    def test_returns_held_value(self):
        """Test that the held value is returned as is."""
        stats = TableStatistics(row_count=1000)

        assert StaticStatsSource(stats).get() is stats


class TestDictSchemaSource:
    """Tests for DictSchemaSource."""

    def test_columns_in_order(self):
        """Test that dictionary order becomes column order."""
        source = DictSchemaSource({"id": "bigint", "name": "varchar", "note": None})

        schema = source.get()

        assert schema.column_names() == ["id", "name", "note"]
        assert schema.get_column("id").data_type == "BIGINT"
        assert not schema.get_column("note").is_typed

    def test_invalid_input(self):
        """Test constructor validation."""
        with pytest.raises(ValueError):
            DictSchemaSource(None)
        with pytest.raises(TypeError):
            DictSchemaSource(["id"])


class TestInlineSchemaSource:
    """Tests for InlineSchemaSource."""

    def test_parse_column_list(self):
        """Test parsing a typed column list."""
        source = InlineSchemaSource(
            "(id INT NOT NULL, customer VARCHAR, amount DECIMAL(10,2))"
        )

        schema = source.get()

        assert schema.column_names() == ["id", "customer", "amount"]
        assert schema.get_column("id").data_type == "INT"
        assert not schema.get_column("id").nullable
        assert schema.get_column("customer").nullable
        assert schema.get_column("amount").data_type == "DECIMAL(10, 2)"

    def test_parentheses_optional(self):
        """Test that the surrounding parentheses may be omitted."""
        schema = InlineSchemaSource("id BIGINT, customer VARCHAR").get()

        assert schema.column_names() == ["id", "customer"]

    def test_untyped_columns(self):
        """Test that columns without a type become untyped hints."""
        schema = InlineSchemaSource("(order_id, customer)").get()

        assert schema.column_names() == ["order_id", "customer"]
        assert not any(column.is_typed for column in schema)

    def test_parsed_once(self):
        """Test that the parsed schema is reused."""
        source = InlineSchemaSource("(id INT)")

        assert source.get() is source.get()

    def test_malformed_text(self):
        """Test that invalid text raises SchemaParseError."""
        with pytest.raises(SchemaParseError):
            InlineSchemaSource("(id INT").get()

    def test_duplicate_columns(self):
        """Test that duplicate columns raise SchemaParseError."""
        with pytest.raises(SchemaParseError, match="Duplicate"):
            InlineSchemaSource("(id INT, ID BIGINT)").get()

    def test_empty_text(self):
        """Test that empty text is rejected."""
        with pytest.raises(ValueError):
            InlineSchemaSource("   ")


class TestFileSchemaSource:
    """Tests for FileSchemaSource."""

    def test_missing_file_is_absent(self, tmp_path):
        """Test that a missing schema file means no schema."""
        assert FileSchemaSource(tmp_path / "missing.json").get() is None

    def test_structured_file(self, tmp_path):
        """Test the structured layout."""
        path = tmp_path / "schema.json"
        path.write_text(
            json.dumps(
                {
                    "columns": [
                        {"name": "id", "type": "int", "nullable": False},
                        {"name": "name", "type": "varchar"},
                    ]
                }
            )
        )

        schema = FileSchemaSource(path).get()

        assert schema.column_names() == ["id", "name"]
        assert schema.get_column("id").data_type == "INT"
        assert not schema.get_column("id").nullable

    def test_flat_file(self, tmp_path):
        """Test the flat column-to-type layout."""
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"id": "bigint", "amount": "double"}))

        schema = FileSchemaSource(path).get()

        assert schema.column_names() == ["id", "amount"]
        assert schema.get_column("amount").data_type == "DOUBLE"

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises SchemaParseError."""
        path = tmp_path / "schema.json"
        path.write_text("{not json")

        with pytest.raises(SchemaParseError) as exc_info:
            FileSchemaSource(path).get()
        assert exc_info.value.source == str(path)

    def test_not_an_object(self, tmp_path):
        """Test that a JSON array is rejected."""
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(["id", "name"]))

        with pytest.raises(SchemaParseError):
            FileSchemaSource(path).get()

    def test_bad_type_reports_file(self, tmp_path):
        """Test that an invalid type value is reported with the file path."""
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"id": 42}))

        with pytest.raises(SchemaParseError) as exc_info:
            FileSchemaSource(path).get()
        assert exc_info.value.source == str(path)

    def test_memoized_until_reload(self, tmp_path):
        """Test that the file is read once until reload()."""
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"id": "int"}))
        source = FileSchemaSource(path)

        first = source.get()
        path.write_text(json.dumps({"id": "int", "name": "varchar"}))

        assert source.get() is first
        source.reload()
        assert source.get().column_names() == ["id", "name"]

    def test_for_table(self, tmp_path):
        """Test locating the schema file in the table root."""
        config = ProviderConfig()
        (tmp_path / config.schema_file_name).write_text(json.dumps({"id": "int"}))

        source = FileSchemaSource.for_table(TableHandle.from_path(tmp_path), config)

        assert source.get() == TableSchema.from_dict(
            {"columns": [{"name": "id", "type": "INT"}]}
        )

    def test_for_table_without_location(self):
        """Test that a table without location cannot have a schema file."""
        with pytest.raises(ValueError):
            FileSchemaSource.for_table(TableHandle("view_only"))


class TestFileStatsSource:
    """Tests for FileStatsSource."""

    def test_missing_file_is_absent(self, tmp_path):
        """Test that a missing statistics file means unknown statistics."""
        assert FileStatsSource(tmp_path / "missing.json").get() is None

    def test_load_statistics(self, tmp_path):
        """Test reading a statistics file."""
        path = tmp_path / "stats.json"
        path.write_text(
            json.dumps(
                {
                    "row_count": 1000,
                    "columns": {"id": {"null_count": 0, "distinct_count": 1000}},
                }
            )
        )

        stats = FileStatsSource(path).get()

        assert stats.row_count == 1000
        assert stats.get_column("id").distinct_count == 1000
        assert stats.get_column("id").min_value is None

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises StatisticsParseError."""
        path = tmp_path / "stats.json"
        path.write_text("row_count=5")

        with pytest.raises(StatisticsParseError):
            FileStatsSource(path).get()

    def test_invalid_values(self, tmp_path):
        """Test that invalid statistic values raise StatisticsParseError."""
        path = tmp_path / "stats.json"
        path.write_text(json.dumps({"row_count": -3}))

        with pytest.raises(StatisticsParseError):
            FileStatsSource(path).get()

    def test_for_table(self, tmp_path):
        """Test locating the statistics file in the table root."""
        config = ProviderConfig()
        (tmp_path / config.stats_file_name).write_text(json.dumps({"row_count": 7}))

        source = FileStatsSource.for_table(TableHandle.from_path(tmp_path), config)

        assert source.get().row_count == 7
