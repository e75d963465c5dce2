"""Tests for the PDF / DOCX export."""

import pytest

from utils_capacity_planning.errors_capacity import EmptyDatasetError
from utils_capacity_planning.report_capacity_planning import build_report_model, report_capacity_planning


@pytest.fixture
def records(make_samples):
    out = []
    for day in range(1, 10):
        out += make_samples(f"2024-03-{day:02d}", 3, cpu="75")
    return out


class TestReportModel:
    def test_kpis_and_sections(self, records):
        model = build_report_model(records, client_name="Acme", period="Mar 2024")

        assert model.kpis["Total Records"] == "27"
        assert model.kpis["Average CPU Usage"] == "75.00%"
        assert model.kpis["Average Network Traffic"] == "1.00 MB/s"
        assert list(model.sections)[:2] == ["Monthly Resource Statistics", "Maintenance Schedule"]
        assert len(model.sections["Maintenance Schedule"]) == 10

    def test_plain_punctuation_in_headings(self, records):
        model = build_report_model(records)

        assert model.title == "Database Capacity Planning: Executive Report"
        assert list(model.sections)[-1] == "Appendix: Daily Averages"
        assert all("—" not in name for name in [model.title, *model.sections])

    def test_missing_logo_is_ignored(self, records):
        model = build_report_model(records, logo_path="/nonexistent/logo.png")
        assert model.logo_path is None

    def test_empty_dataset_rejected(self):
        with pytest.raises(EmptyDatasetError):
            build_report_model([])


class TestReportBytes:
    def test_pdf_and_docx(self, records):
        pdf_bytes, docx_bytes = report_capacity_planning(records, client_name="Acme", period="Mar 2024")
        assert pdf_bytes.startswith(b"%PDF")
        assert docx_bytes.startswith(b"PK")
