"""Static catalog of report formats, report types and example commands."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReportFormat:
    """A downloadable report format."""

    name: str
    extension: str
    media_type: str


FORMATS: dict[str, ReportFormat] = {
    "json": ReportFormat("JSON", ".json", "application/json"),
    "pdf": ReportFormat("PDF", ".pdf", "application/pdf"),
    "excel": ReportFormat(
        "Excel",
        ".xlsx",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ),
}

REPORT_NAMES: dict[str, str] = {
    "ventas_basico": "Reporte Básico de Ventas",
    "top_productos": "Top Productos Más Vendidos",
    "ventas_por_producto": "Ventas por Producto",
    "ventas_por_cliente": "Ventas por Cliente",
    "ventas_por_categoria": "Ventas por Categoría",
    "rfm_analysis": "Análisis RFM",
    "abc_analysis": "Análisis ABC",
    "dashboard": "Dashboard Ejecutivo",
    "inventario": "Análisis de Inventario",
    "prediccion_ventas": "Predicción de Ventas",
    "prediccion_productos": "Predicción de Productos",
    "recomendaciones": "Recomendaciones",
    "comparativo": "Análisis Comparativo",
    "tendencias": "Análisis de Tendencias",
}

EXAMPLES: dict[str, list[str]] = {
    "basic": [
        "reporte de ventas del último mes",
        "ventas de esta semana",
        "reporte de ventas de octubre",
        "ventas de hoy",
        "ventas del año 2024",
    ],
    "products": [
        "top 10 productos más vendidos",
        "productos más vendidos del mes",
        "ventas por producto",
        "análisis de productos",
    ],
    "customers": [
        "ventas por cliente",
        "top 20 clientes",
        "mejores clientes del año",
        "reporte de clientes del mes",
    ],
    "advanced": [
        "análisis RFM",
        "análisis ABC",
        "dashboard ejecutivo",
        "análisis de inventario",
    ],
    "ml": [
        "predicción de ventas para 7 días",
        "forecast del próximo mes",
        "predice qué productos se venderán",
        "predicción de productos para la semana",
    ],
}


def all_examples() -> list[str]:
    """Every example command, in category order."""
    return [example for examples in EXAMPLES.values() for example in examples]


def report_name(report_type: str | None) -> str:
    """Readable name for a report type, falling back to the raw type."""
    if not report_type:
        return "Reporte"
    return REPORT_NAMES.get(report_type, report_type)
