import io

import pandas as pd
import pytest

from ingestion.loader import DatasetLoadError, load_records


class TestDelimited:
    def test_csv_keeps_header_order_and_raw_strings(self):
        content = b"region,sales,date\nNorth,100,2023-01-01\nSouth,,2023-01-02\n"
        dataset = load_records(content, "sales.csv")

        assert dataset.name == "sales.csv"
        assert dataset.columns == ["region", "sales", "date"]
        assert dataset.row_count == 2
        assert dataset.records[0] == {"region": "North", "sales": "100", "date": "2023-01-01"}
        assert dataset.records[1]["sales"] == ""

    def test_blank_lines_are_skipped(self):
        dataset = load_records("a,b\n1,2\n\n3,4\n", "data.csv")
        assert dataset.records == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_tsv(self):
        dataset = load_records("a\tb\nx\t1\n", "data.tsv")
        assert dataset.records == [{"a": "x", "b": "1"}]

    def test_byte_order_mark_is_dropped(self):
        dataset = load_records("\ufeffa,b\n1,2\n".encode("utf-8"), "bom.csv")
        assert dataset.columns == ["a", "b"]

    def test_header_only_file_has_columns_but_no_records(self):
        dataset = load_records(b"a,b\n", "empty.csv")
        assert dataset.columns == ["a", "b"]
        assert dataset.records == []

    def test_empty_file(self):
        dataset = load_records(b"", "empty.csv")
        assert dataset.columns == []
        assert dataset.records == []


class TestSpreadsheet:
    def test_first_sheet_is_read(self):
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            pd.DataFrame({"region": ["North", "South"], "sales": [10, None]}).to_excel(
                writer, sheet_name="first", index=False
            )
            pd.DataFrame({"other": [1]}).to_excel(writer, sheet_name="second", index=False)

        dataset = load_records(buffer.getvalue(), "report.xlsx")

        assert dataset.columns == ["region", "sales"]
        assert dataset.records[0]["region"] == "North"
        assert dataset.records[0]["sales"] == 10
        assert dataset.records[1]["sales"] is None

    def test_corrupt_workbook_raises(self):
        with pytest.raises(DatasetLoadError, match="Could not read spreadsheet"):
            load_records(b"definitely not a zip archive", "broken.xlsx")

    def test_legacy_workbook_goes_through_excel_reader(self, monkeypatch):
        calls = []

        def fake_read_excel(buffer, sheet_name):
            calls.append((buffer.getvalue(), sheet_name))
            return pd.DataFrame({"region": ["North"], "sales": [4.0]})

        monkeypatch.setattr(pd, "read_excel", fake_read_excel)
        dataset = load_records(b"\xd0\xcf\x11\xe0legacy", "old.XLS")

        assert calls == [(b"\xd0\xcf\x11\xe0legacy", 0)]
        assert dataset.records == [{"region": "North", "sales": 4.0}]

    def test_corrupt_legacy_workbook_raises(self):
        with pytest.raises(DatasetLoadError, match="Could not read spreadsheet"):
            load_records(b"not a workbook", "broken.xls")

    def test_text_content_is_rejected(self):
        with pytest.raises(DatasetLoadError):
            load_records("a,b", "report.xlsx")


@pytest.mark.parametrize("filename", ["data.json", "legacy.ods", "noextension", ""])
def test_unsupported_extensions(filename):
    with pytest.raises(DatasetLoadError, match="Unsupported file type"):
        load_records(b"a,b\n1,2\n", filename)
