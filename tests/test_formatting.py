"""
Tests for display helpers and the report catalog.
"""

from datetime import date

import pytest

from voice_commands.catalog import EXAMPLES, all_examples, report_name
from voice_commands.utils import (
    clean_report_type,
    confidence_level,
    format_confidence,
    format_processing_time,
    generate_filename,
    status_display,
    truncate_text,
)


def test_format_confidence():
    assert format_confidence(0.92) == "92%"
    assert format_confidence(0) == "0%"
    assert format_confidence(1) == "100%"


@pytest.mark.parametrize(
    "score, level",
    [(0.92, "high"), (0.7, "high"), (0.69, "medium"), (0.4, "medium"), (0.39, "low")],
)
def test_confidence_level(score, level):
    assert confidence_level(score) == level


def test_format_processing_time():
    assert format_processing_time(850) == "850ms"
    assert format_processing_time(1500) == "1.50s"


def test_truncate_text():
    assert truncate_text("corto", 10) == "corto"
    assert truncate_text("a" * 12, 10) == "a" * 10 + "..."
    assert truncate_text(None) is None


def test_status_display():
    assert status_display("EXECUTED") == "✅ Ejecutado"
    assert status_display("OTRO") == "OTRO"


def test_clean_report_type():
    assert clean_report_type("Ventas Básico-2024") == "ventas_b_sico_2024"


def test_generate_filename():
    day = date(2025, 3, 9)

    assert generate_filename("ventas_basico", "pdf", 42, day) == "ventas_basico_2025-03-09_42.pdf"
    assert generate_filename("reporte", "excel", 7, day) == "reporte_2025-03-09_7.xlsx"
    assert generate_filename("reporte", "json", 7, day) == "reporte_2025-03-09_7.json"


def test_catalog():
    assert set(EXAMPLES) == {"basic", "products", "customers", "advanced", "ml"}
    assert "análisis RFM" in all_examples()
    assert report_name("rfm_analysis") == "Análisis RFM"
    assert report_name("desconocido") == "desconocido"
    assert report_name(None) == "Reporte"
