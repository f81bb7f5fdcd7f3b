from profiling.models import ColumnClassification
from profiling.recommend import (
    category_distribution_pie,
    category_vs_numeric_bar,
    cumulative_stacked_area,
    multi_metric_bars,
    numeric_pair_area,
    recommend_charts,
    time_series_line,
)


class TestBarRule:
    """Categorical x numeric aggregation."""

    def test_sums_per_group_in_first_seen_order(self):
        records = [
            {"cat": "A", "val": "5"},
            {"cat": "A", "val": "3"},
            {"cat": "B", "val": "2"},
        ]
        columns = ColumnClassification(numeric=["val"], categorical=["cat"])
        charts = recommend_charts(records, columns)

        bar = charts[0]
        assert bar.type == "bar"
        assert bar.title == "val by cat"
        assert bar.data == [{"name": "A", "value": 8}, {"name": "B", "value": 2}]
        assert bar.x_key == "name"
        assert bar.y_key == "value"

    def test_keeps_first_ten_groups(self):
        records = [{"cat": f"G{idx}", "val": "1"} for idx in range(12)]
        columns = ColumnClassification(numeric=["val"], categorical=["cat"])
        bar = category_vs_numeric_bar(records, columns)
        assert len(bar.data) == 10
        assert bar.data[0]["name"] == "G0"
        assert bar.data[-1]["name"] == "G9"

    def test_skips_missing_category_and_invalid_values(self):
        records = [
            {"cat": "", "val": "5"},
            {"cat": None, "val": "5"},
            {"cat": "A", "val": "oops"},
            {"cat": "A", "val": "0.1"},
            {"cat": "A", "val": "0.2"},
        ]
        columns = ColumnClassification(numeric=["val"], categorical=["cat"])
        bar = category_vs_numeric_bar(records, columns)
        assert bar.data == [{"name": "A", "value": 0.3}]

    def test_requires_both_column_types(self):
        records = [{"cat": "A"}]
        assert category_vs_numeric_bar(records, ColumnClassification(categorical=["cat"])) is None


class TestLineRule:
    """Temporal x numeric time series."""

    def test_formats_dates_and_filters_rows(self):
        records = [
            {"day": "2023-01-15", "val": "4"},
            {"day": "", "val": "5"},
            {"day": "2023-01-16", "val": "bad"},
            {"day": "2023-01-17", "val": "6.5"},
        ]
        columns = ColumnClassification(numeric=["val"], temporal=["day"])
        line = time_series_line(records, columns)

        assert line.type == "line"
        assert line.title == "val Trend Over Time"
        assert line.data == [
            {"date": "1/15/2023", "value": 4.0},
            {"date": "1/17/2023", "value": 6.5},
        ]
        assert (line.x_key, line.y_key) == ("date", "value")

    def test_caps_at_fifty_points(self):
        records = [{"day": "2023-03-01", "val": str(idx)} for idx in range(80)]
        columns = ColumnClassification(numeric=["val"], temporal=["day"])
        line = time_series_line(records, columns)
        assert len(line.data) == 50
        assert line.data[-1]["value"] == 49.0

    def test_no_qualifying_rows_emits_nothing(self):
        records = [{"day": "", "val": "1"}, {"day": "2023-01-01", "val": ""}]
        columns = ColumnClassification(numeric=["val"], temporal=["day"])
        assert time_series_line(records, columns) is None

    def test_date_format_override(self, monkeypatch):
        monkeypatch.setenv("PROFILING_DATE_FORMAT", "%Y-%m-%d")
        records = [{"day": "2023-01-15", "val": "4"}]
        columns = ColumnClassification(numeric=["val"], temporal=["day"])
        assert time_series_line(records, columns).data == [{"date": "2023-01-15", "value": 4.0}]


class TestNumericRules:
    """Rules driven by two or more numeric columns."""

    # Row 0 carries an invalid "b" cell, which the numeric rules coerce to 0.
    records = [
        {"a": str(idx), "b": "x" if idx == 0 else str(idx * 2), "c": "1", "d": "9"}
        for idx in range(40)
    ]
    columns = ColumnClassification(numeric=["a", "b", "c", "d"])

    def test_area_pairs_first_two_columns(self):
        area = numeric_pair_area(self.records, self.columns)
        assert area.type == "area"
        assert area.title == "a vs b"
        assert area.keys == ["value1", "value2"]
        assert len(area.data) == 30
        assert area.data[0] == {"name": "Point 1", "value1": 0.0, "value2": 0}
        assert area.data[1] == {"name": "Point 2", "value1": 1.0, "value2": 2.0}

    def test_multibar_uses_three_columns(self):
        multibar = multi_metric_bars(self.records, self.columns)
        assert multibar.type == "multibar"
        assert multibar.title == "Multi-Metric Analysis"
        assert multibar.keys == ["a", "b", "c"]
        assert len(multibar.data) == 15
        assert multibar.data[0] == {"name": "Row 1", "a": 0.0, "b": 0, "c": 1.0}

    def test_stacked_area_keyed_by_column_names(self):
        stacked = cumulative_stacked_area(self.records, self.columns)
        assert stacked.type == "stackedarea"
        assert stacked.title == "Cumulative Comparison"
        assert stacked.keys == ["a", "b"]
        assert len(stacked.data) == 20
        assert stacked.data[3] == {"name": "P4", "a": 3.0, "b": 6.0}

    def test_single_numeric_column_fires_none(self):
        columns = ColumnClassification(numeric=["a"])
        assert numeric_pair_area(self.records, columns) is None
        assert multi_metric_bars(self.records, columns) is None
        assert cumulative_stacked_area(self.records, columns) is None


def test_pie_counts_first_six_values():
    values = ["A", "B", "A", "C", "D", "E", "F", "G", "", None]
    records = [{"cat": value} for value in values]
    pie = category_distribution_pie(records, ColumnClassification(categorical=["cat"]))

    assert pie.type == "pie"
    assert pie.title == "Distribution of cat"
    assert pie.data == [
        {"name": "A", "value": 2},
        {"name": "B", "value": 1},
        {"name": "C", "value": 1},
        {"name": "D", "value": 1},
        {"name": "E", "value": 1},
        {"name": "F", "value": 1},
    ]


def test_rule_order_with_all_column_types():
    records = [
        {"region": "N", "day": "2023-01-01", "sales": "1", "cost": "2"},
        {"region": "S", "day": "2023-01-02", "sales": "3", "cost": "4"},
    ]
    columns = ColumnClassification(
        numeric=["sales", "cost"], temporal=["day"], categorical=["region"]
    )
    types = [chart.type for chart in recommend_charts(records, columns)]
    assert types == ["bar", "line", "area", "pie", "multibar", "stackedarea"]


def test_numeric_only_dataset_fires_overlapping_rules():
    records = [{"x": "1", "y": "2"}]
    columns = ColumnClassification(numeric=["x", "y"])
    types = [chart.type for chart in recommend_charts(records, columns)]
    assert types == ["area", "multibar", "stackedarea"]


def test_all_temporal_dataset_yields_no_charts():
    records = [{"day": "2023-01-01"}, {"day": "2023-01-02"}]
    assert recommend_charts(records, ColumnClassification(temporal=["day"])) == []


def test_chart_serialization_omits_absent_keys():
    records = [{"cat": "A"}]
    pie = category_distribution_pie(records, ColumnClassification(categorical=["cat"]))
    assert pie.to_dict() == {
        "type": "pie",
        "title": "Distribution of cat",
        "data": [{"name": "A", "value": 1}],
    }
