from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO
from typing import Optional

import pytest
from PIL import Image
from pypdf import PdfReader

from reporter.frontends.pdf import create_document, render
from reporter.frontends.pdf.document import format_money, format_odometer
from reporter.viewmodel import Group, ReportType, ReportViewModel, Vehicle

GENERATED_AT = datetime(2025, 3, 24, 12, 0, tzinfo=timezone.utc)


def make_view(
    report_type: ReportType = ReportType.SERVICE,
    report: Optional[dict] = None,
    parts: Optional[list[dict]] = None,
    logo: Optional[bytes] = None,
) -> ReportViewModel:
    return ReportViewModel.from_documents(
        report_type,
        {"$id": "r1", "title": "Cambio de aceite", "laborCost": 30, **(report or {})},
        vehicle=Vehicle.from_documents({}),
        group=Group.from_document({"$id": "g1", "name": "Norte"}, logo=logo),
        parts=parts or [],
    )


def read_pdf(data: bytes) -> PdfReader:
    assert data.startswith(b"%PDF")
    return PdfReader(BytesIO(data))


def text_of(reader: PdfReader) -> str:
    return "\n".join(page.extract_text() for page in reader.pages)


def text_positions(reader: PdfReader) -> dict[str, tuple[float, float]]:
    """Maps strings on the first page to their (x, baseline) position, y from the top."""
    page = reader.pages[0]
    height = float(page.mediabox.height)
    positions: dict[str, tuple[float, float]] = {}

    def visit(text, cm, tm, font_dict, font_size):
        if text.strip():
            positions.setdefault(text.strip(), (float(tm[4]), height - float(tm[5])))

    page.extract_text(visitor_text=visit)
    return positions


def position_of(reader: PdfReader, fragment: str) -> tuple[float, float]:
    (pos,) = [p for text, p in text_positions(reader).items() if fragment in text]
    return pos


def test_render_metadata() -> None:
    reader = read_pdf(render(make_view(), GENERATED_AT))
    meta = reader.metadata
    assert meta.title == "Reporte de Servicio - Cambio de aceite"
    assert meta.author == "MyCAD Admin"
    assert meta.creator == "MyCAD System"
    assert meta.subject == "Reporte de Servicio de Vehículo"


def test_render_repair_metadata() -> None:
    view = make_view(ReportType.REPAIR, report={"title": "Golpe"})
    meta = read_pdf(render(view, GENERATED_AT)).metadata
    assert meta.title == "Reporte de Reparación - Golpe"
    assert meta.subject == "Reporte de Reparación de Vehículo"


def test_render_service_costs() -> None:
    view = make_view(
        parts=[
            {"name": "Filtro", "quantity": 2, "unitCost": 100},
            {"name": "Aceite", "quantity": 1, "unitCost": 50},
        ]
    )
    text = text_of(read_pdf(render(view, GENERATED_AT)))
    assert "$330.00" in text
    assert "$200.00" in text
    assert "Filtro" in text
    assert "Refacciones Reemplazadas" in text
    assert "BORRADOR" in text


def test_render_without_parts_omits_table() -> None:
    text = text_of(read_pdf(render(make_view(), GENERATED_AT)))
    assert "Refacciones Reemplazadas" not in text
    assert "$30.00" in text


def test_render_placeholders() -> None:
    text = text_of(read_pdf(render(make_view(), GENERATED_AT)))
    assert "Placas:" in text
    assert "- -" in text  # brand and model


def test_render_untitled_and_finalized() -> None:
    view = make_view(report={"title": "", "finalizedAt": "2025-03-25"})
    text = text_of(read_pdf(render(view, GENERATED_AT)))
    assert "Sin t" in text
    assert "FINALIZADO" in text
    assert "Creado por: Sistema" in text


def test_render_page_break() -> None:
    parts = [{"name": f"Parte {i}", "quantity": 1, "unitCost": 1} for i in range(80)]
    reader = read_pdf(render(make_view(parts=parts), GENERATED_AT))
    assert len(reader.pages) > 1
    for page in reader.pages:
        assert "MyCAD Admin" in page.extract_text()
    assert "Parte 79" in text_of(reader)


def test_render_long_description_wraps() -> None:
    description = "Lorem ipsum dolor sit amet " * 400
    reader = read_pdf(render(make_view(report={"description": description}), GENERATED_AT))
    assert len(reader.pages) > 1


def test_render_with_logo() -> None:
    buf = BytesIO()
    Image.new("RGB", (120, 80), "white").save(buf, format="PNG")
    reader = read_pdf(render(make_view(logo=buf.getvalue()), GENERATED_AT))
    assert "MyCAD" in text_of(reader)
    # the logo occupies x 50-110, top 15-55
    x, baseline = position_of(reader, "REPORTE DE SERVICIO")
    assert x == pytest.approx(120)
    assert baseline == pytest.approx(42 + 9 * 0.8)


def test_render_without_logo_subtitle_at_margin() -> None:
    reader = read_pdf(render(make_view(), GENERATED_AT))
    x, baseline = position_of(reader, "REPORTE DE SERVICIO")
    assert x == pytest.approx(50)
    assert baseline == pytest.approx(45 + 9 * 0.8)


def test_render_with_invalid_logo() -> None:
    reader = read_pdf(render(make_view(logo=b"not an image"), GENERATED_AT))
    assert "MyCAD" in text_of(reader)


@pytest.mark.anyio
async def test_create_document() -> None:
    data = await create_document(make_view(), GENERATED_AT)
    assert read_pdf(data).metadata.title == "Reporte de Servicio - Cambio de aceite"


def test_format_money() -> None:
    assert format_money(Decimal("330")) == "$330.00"
    assert format_money(Decimal("0.005")) == "$0.01"
    assert format_money(Decimal("1234.5")) == "$1234.50"


def test_format_odometer() -> None:
    assert format_odometer(Decimal(125000)) == "125,000 km"
    assert format_odometer(Decimal("1500.5")) == "1,500.5 km"
    assert format_odometer(None) == "-"


def test_render_huge_amounts() -> None:
    view = make_view(
        report={"laborCost": 12345678901234567890123456789},
        parts=[{"name": "Motor", "quantity": 1, "unitCost": "1e30"}],
    )
    text = text_of(read_pdf(render(view, GENERATED_AT)))
    assert "$1.00e+30" in text
    assert "$1.23e+28" in text


def test_format_money_huge() -> None:
    assert format_money(Decimal("1e30")) == "$1.00e+30"
    assert format_money(Decimal("-1e21")) == "$-1.00e+21"
    assert format_money(Decimal("999999999999999999999")) == "$999999999999999999999.00"


def test_render_long_title_wraps() -> None:
    title = "Mantenimiento preventivo completo de la unidad " * 4
    short = read_pdf(render(make_view(), GENERATED_AT))
    long = read_pdf(render(make_view(report={"title": title}), GENERATED_AT))
    text = text_of(long)
    assert "..." not in text
    assert text.count("Mantenimiento") == 4
    assert text.count("unidad") == 4
    _, short_y = position_of(short, "INFORMACI")
    _, long_y = position_of(long, "INFORMACI")
    assert long_y > short_y
