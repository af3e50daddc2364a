"""
Tests for the data models.

This module contains tests for ColumnMetadata, TableSchema, statistics,
physical layout, TableMetadataProvider, ProviderKind and ProviderConfig.
"""

import dataclasses

import pytest

from metadata_provider import (
    ColumnMetadata,
    ColumnStatistics,
    ErrorMode,
    FileMetadata,
    PhysicalLayout,
    ProviderConfig,
    ProviderKind,
    RowGroupMetadata,
    SchemaParseError,
    TableHandle,
    TableMetadataProvider,
    TableSchema,
    TableStatistics,
)
from metadata_provider.utils import normalize_type, types_equal


class TestTypeUtils:
    """Tests for type normalization."""

    def test_normalize_simple_types(self):
        """Test that type names are upper-cased and canonicalized."""
        assert normalize_type("int") == "INT"
        assert normalize_type("bigint") == "BIGINT"
        assert normalize_type("varchar") == "VARCHAR"

    def test_normalize_parameterized_type(self):
        """Test that type parameters are rendered consistently."""
        assert normalize_type("decimal(10,2)") == "DECIMAL(10, 2)"

    def test_normalize_empty_type_raises(self):
        """Test that an empty type name is rejected."""
        with pytest.raises(SchemaParseError):
            normalize_type("  ")

    def test_types_equal(self):
        """Test type comparison."""
        assert types_equal("decimal(10,2)", "DECIMAL(10, 2)")
        assert types_equal("int4", "INT", dialect="postgres")
        assert not types_equal("INT", "BIGINT")
        assert types_equal(None, None)
        assert not types_equal("INT", None)


class TestColumnMetadata:
    """Tests for ColumnMetadata."""

    def test_of_normalizes_type(self):
        """Test that the factory normalizes the type."""
        column = ColumnMetadata.of("amount", "decimal(10,2)")

        assert column.name == "amount"
        assert column.data_type == "DECIMAL(10, 2)"
        assert column.nullable

    def test_untyped_column(self):
        """Test a column without type."""
        column = ColumnMetadata("id")

        assert not column.is_typed
        assert column.with_type("INT").data_type == "INT"
        assert column.data_type is None  # Original unchanged

    def test_empty_name_raises(self):
        """Test that a column needs a name."""
        with pytest.raises(ValueError, match="column name cannot be empty"):
            ColumnMetadata("")

    def test_frozen(self):
        """Test that columns cannot be mutated."""
        column = ColumnMetadata("id", "INT")

        with pytest.raises(dataclasses.FrozenInstanceError):
            column.name = "other"


class TestTableSchema:
    """Tests for TableSchema."""

    def setup_method(self):
        self.schema = TableSchema.from_columns(
            [
                ColumnMetadata("id", "BIGINT", nullable=False),
                ColumnMetadata("name", "VARCHAR"),
                ColumnMetadata("amount"),
            ]
        )

    def test_order_is_preserved(self):
        """Test that columns keep their order."""
        assert self.schema.column_names() == ["id", "name", "amount"]
        assert len(self.schema) == 3

    def test_columns_are_a_tuple(self):
        """Test that a list of columns is frozen into a tuple."""
        schema = TableSchema([ColumnMetadata("id")])

        assert isinstance(schema.columns, tuple)

    def test_lookup_is_case_insensitive(self):
        """Test column lookup ignores case."""
        assert self.schema.get_column("ID").data_type == "BIGINT"
        assert self.schema.has_column("Name")
        assert self.schema.get_column("missing") is None

    def test_duplicate_names_rejected(self):
        """Test that duplicate names (ignoring case) are rejected."""
        with pytest.raises(ValueError, match="Duplicate column name"):
            TableSchema.from_columns([ColumnMetadata("id"), ColumnMetadata("ID")])

    def test_empty_schema(self):
        """Test that an empty schema is valid."""
        schema = TableSchema()

        assert schema.is_empty()
        assert schema.column_names() == []

    def test_fill_types_from(self):
        """Test that untyped columns take types from another schema."""
        discovered = TableSchema.from_columns(
            [
                ColumnMetadata("amount", "DOUBLE"),
                ColumnMetadata("id", "INT"),
                ColumnMetadata("extra", "VARCHAR"),
            ]
        )

        filled = self.schema.fill_types_from(discovered)

        assert filled.column_names() == ["id", "name", "amount"]
        assert filled.get_column("id").data_type == "BIGINT"  # Already typed
        assert filled.get_column("amount").data_type == "DOUBLE"
        assert not filled.has_column("extra")

    def test_dict_round_trip(self):
        """Test conversion to and from dictionaries."""
        data = self.schema.to_dict()

        assert data["columns"][0] == {"name": "id", "type": "BIGINT", "nullable": False}
        assert TableSchema.from_dict(data) == self.schema


class TestTableStatistics:
    """Tests for TableStatistics and ColumnStatistics."""

    def test_unknown_by_default(self):
        """Test that statistics default to unknown, not zero."""
        stats = TableStatistics()

        assert stats.row_count is None
        assert not stats.has_row_count

    def test_negative_values_rejected(self):
        """Test that counts cannot be negative."""
        with pytest.raises(ValueError):
            TableStatistics(row_count=-1)
        with pytest.raises(ValueError):
            ColumnStatistics("id", null_count=-5)

    def test_from_dict(self):
        """Test loading statistics from a dictionary."""
        stats = TableStatistics.from_dict(
            {
                "row_count": 1000,
                "columns": {"id": {"null_count": 0, "distinct_count": 1000, "min": 1, "max": 1000}},
            }
        )

        assert stats.row_count == 1000
        column = stats.get_column("ID")
        assert column.distinct_count == 1000
        assert column.has_bounds
        assert stats.to_dict()["columns"]["id"]["max"] == 1000


class TestPhysicalLayout:
    """Tests for PhysicalLayout."""

    def make_layout(self):
        first = FileMetadata(
            path="/data/t/region=eu/a.parquet",
            row_count=30,
            partition_values=(("region", "eu"),),
            row_groups=(
                RowGroupMetadata(
                    index=0,
                    row_count=10,
                    columns=(
                        ColumnStatistics("id", null_count=0, min_value=1, max_value=10),
                        ColumnStatistics("name", null_count=1, min_value="a", max_value="m"),
                    ),
                ),
                RowGroupMetadata(
                    index=1,
                    row_count=20,
                    columns=(
                        ColumnStatistics("id", null_count=2, min_value=11, max_value=30),
                        ColumnStatistics("name", null_count=None, min_value="b", max_value="z"),
                    ),
                ),
            ),
        )
        second = FileMetadata(
            path="/data/t/region=us/b.parquet",
            row_count=5,
            partition_values=(("region", "us"),),
            row_groups=(
                RowGroupMetadata(
                    index=0,
                    row_count=5,
                    columns=(
                        ColumnStatistics("id", null_count=0, min_value=-4, max_value=0),
                        ColumnStatistics("name", null_count=0),
                    ),
                ),
            ),
        )
        return PhysicalLayout(location="/data/t", files=(first, second))

    def test_counts(self):
        """Test aggregate counts."""
        layout = self.make_layout()

        assert layout.row_count == 35
        assert layout.file_count == 2
        assert len(layout.row_groups) == 3
        assert layout.partition_columns == ["region"]

    def test_summarize_statistics(self):
        """Test that row group statistics are combined."""
        stats = self.make_layout().summarize_statistics()

        assert stats.row_count == 35
        id_stats = stats.get_column("id")
        assert id_stats.null_count == 2
        assert id_stats.min_value == -4
        assert id_stats.max_value == 30

    def test_incomplete_statistics_are_unknown(self):
        """Test that a statistic missing in one row group becomes unknown."""
        name_stats = self.make_layout().summarize_statistics().get_column("name")

        assert name_stats.null_count is None
        assert name_stats.min_value is None
        assert name_stats.max_value is None

    def test_incomparable_bounds_are_unknown(self):
        """Test that bounds of mixed types are dropped."""
        layout = PhysicalLayout(
            location="/data/t",
            files=(
                FileMetadata(
                    path="a",
                    row_count=2,
                    row_groups=(
                        RowGroupMetadata(0, 1, columns=(ColumnStatistics("v", min_value=1, max_value=2),)),
                        RowGroupMetadata(1, 1, columns=(ColumnStatistics("v", min_value="x", max_value="y"),)),
                    ),
                ),
            ),
        )

        v_stats = layout.summarize_statistics().get_column("v")

        assert v_stats.min_value is None
        assert v_stats.max_value is None

    def test_empty_layout(self):
        """Test a layout without files."""
        layout = PhysicalLayout(location="/data/empty")

        assert layout.summarize_statistics().row_count == 0
        assert layout.get_file("missing") is None


class TestTableMetadataProvider:
    """Tests for TableMetadataProvider."""

    def test_schema_only_provider(self):
        """Test a provider without layout."""
        provider = TableMetadataProvider(kind=ProviderKind.SCHEMA_STATS_ONLY)

        assert provider.schema.is_empty()
        assert provider.statistics is None
        assert provider.row_count is None
        assert provider.files == ()
        assert provider.row_groups == []
        assert provider.get_column_statistics("id") is None

    def test_full_discovery_requires_layout(self):
        """Test that a full discovery provider must carry a layout."""
        with pytest.raises(ValueError, match="requires a physical layout"):
            TableMetadataProvider(kind=ProviderKind.FULL_DISCOVERY)

    def test_schema_only_rejects_layout(self):
        """Test that a schema-only provider cannot carry a layout."""
        with pytest.raises(ValueError, match="cannot carry a physical layout"):
            TableMetadataProvider(
                kind=ProviderKind.SCHEMA_STATS_ONLY,
                layout=PhysicalLayout(location="/data/t"),
            )

    def test_provider_is_immutable(self):
        """Test that providers cannot be mutated."""
        provider = TableMetadataProvider(kind=ProviderKind.SCHEMA_STATS_ONLY)

        with pytest.raises(dataclasses.FrozenInstanceError):
            provider.statistics = TableStatistics(row_count=1)

    def test_to_dict(self):
        """Test converting to dictionary."""
        provider = TableMetadataProvider(
            kind=ProviderKind.FULL_DISCOVERY,
            schema=TableSchema.from_columns([ColumnMetadata("id", "INT")]),
            statistics=TableStatistics(row_count=0),
            layout=PhysicalLayout(location="/data/t"),
            table=TableHandle("t", "/data/t"),
        )

        data = provider.to_dict()

        assert data["kind"] == "full_discovery"
        assert data["table"] == "t"
        assert data["schema"] == [{"name": "id", "type": "INT", "nullable": True}]
        assert data["layout"]["files"] == []


class TestProviderKind:
    """Tests for ProviderKind."""

    def test_from_string(self):
        """Test parsing kinds from user input."""
        assert ProviderKind.from_string("Schema-Stats-Only") is ProviderKind.SCHEMA_STATS_ONLY
        assert ProviderKind.from_string("full_discovery") is ProviderKind.FULL_DISCOVERY

    def test_from_string_invalid(self):
        """Test that unknown kinds are rejected."""
        with pytest.raises(ValueError, match="Invalid provider kind"):
            ProviderKind.from_string("parquet")

    def test_requires_discovery(self):
        """Test which kinds need a physical scan."""
        assert ProviderKind.FULL_DISCOVERY.requires_discovery
        assert not ProviderKind.SCHEMA_STATS_ONLY.requires_discovery


class TestProviderConfig:
    """Tests for ProviderConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = ProviderConfig()

        assert config.file_extensions == (".parquet",)
        assert config.on_schema_mismatch is ErrorMode.WARN
        assert config.collect_row_group_stats

    def test_file_extensions_frozen(self):
        """Test that file extensions are stored as a tuple."""
        config = ProviderConfig(file_extensions=[".parquet", ".parq"])

        assert config.file_extensions == (".parquet", ".parq")

    def test_invalid_values(self):
        """Test configuration validation."""
        with pytest.raises(TypeError):
            ProviderConfig(on_schema_mismatch="warn")
        with pytest.raises(TypeError):
            ProviderConfig(ignore_hidden_files="yes")
        with pytest.raises(ValueError):
            ProviderConfig(file_extensions=())
        with pytest.raises(ValueError):
            ProviderConfig(schema_file_name="x.json", stats_file_name="x.json")


class TestTableHandle:
    """Tests for TableHandle."""

    def test_from_path(self):
        """Test that the last path segment becomes the name."""
        handle = TableHandle.from_path("/data/warehouse/orders")

        assert handle.name == "orders"
        assert handle.location == "/data/warehouse/orders"

    def test_explicit_name(self):
        """Test overriding the derived name."""
        assert TableHandle.from_path("/data/x", name="sales").name == "sales"
