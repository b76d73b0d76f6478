"""Tests for element_reader.py."""

import openpyxl
import pytest

from element_reader import read_elements
from models import ChemicalElement, DatasetError

from conftest import write_dataset


class TestReadElements:
    def test_valid_parse(self, tmp_path, dataset_records):
        path = tmp_path / "elementi.xlsx"
        write_dataset(path, dataset_records)
        elements = read_elements(path)
        assert len(elements) == 20
        assert all(isinstance(e, ChemicalElement) for e in elements)
        assert elements[0].name == "Idrogeno"
        assert elements[0].atomic_number == "1"
        assert elements[0].symbol == "H"

    def test_empty_cells_become_empty_strings(self, tmp_path, dataset_records):
        path = tmp_path / "elementi.xlsx"
        write_dataset(path, dataset_records)
        carbonio = read_elements(path)[5]
        assert carbonio.name == "Carbonio"
        assert carbonio.discovery_year == ""
        assert carbonio.industrial_use == ""

    def test_header_below_title_row(self, tmp_path, dataset_records):
        path = tmp_path / "elementi.xlsx"
        write_dataset(path, dataset_records, title_row=True)
        assert len(read_elements(path)) == 20

    def test_rows_without_name_skipped(self, tmp_path, dataset_records, capsys):
        path = tmp_path / "elementi.xlsx"
        records = dataset_records[:3] + [{"Elemento": None, "Z": 99}] + dataset_records[3:5]
        write_dataset(path, records)
        assert [e.name for e in read_elements(path)] == [
            "Idrogeno", "Elio", "Litio", "Berillio", "Boro",
        ]
        assert "skipped 1 row(s)" in capsys.readouterr().err

    def test_missing_columns_warn(self, tmp_path, capsys):
        path = tmp_path / "ridotto.xlsx"
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(["Elemento", "Simbolo"])
        ws.append(["Ferro", "Fe"])
        wb.save(path)

        elements = read_elements(path)
        assert elements == [ChemicalElement(name="Ferro", symbol="Fe")]
        assert "missing columns" in capsys.readouterr().err

    def test_no_header_row(self, tmp_path):
        path = tmp_path / "senza.xlsx"
        wb = openpyxl.Workbook()
        wb.active.append(["Nome", "Numero"])
        wb.save(path)
        with pytest.raises(DatasetError, match="No header row"):
            read_elements(path)

    def test_no_records(self, tmp_path):
        path = tmp_path / "vuoto.xlsx"
        write_dataset(path, [])
        with pytest.raises(DatasetError, match="No element records"):
            read_elements(path)

    def test_file_not_found(self):
        with pytest.raises(DatasetError, match="File not found"):
            read_elements("nonexistent.xlsx")

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "finto.xlsx"
        path.write_text("not a zip file")
        with pytest.raises(DatasetError, match="Cannot open workbook"):
            read_elements(path)
