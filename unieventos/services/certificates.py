from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from unieventos.models.users import UserProfile
from unieventos.schemas.events import EventOut
from unieventos.services.events import is_registered

PAGE_WIDTH, PAGE_HEIGHT = A4
CENTER_X = 105 * mm


class CertificateNotAllowedError(Exception):
    pass


def certificate_filename(event: EventOut) -> str:
    return f"{event.title}-certificate.pdf"


def format_event_date(value: str) -> str:
    """Render the stored date as M/D/YYYY, or unchanged if it does not parse."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def render_certificate(event: EventOut, profile: UserProfile) -> bytes:
    if not is_registered(event, profile):
        raise CertificateNotAllowedError("Only registered participants can download a certificate.")

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(certificate_filename(event))

    # Layout positions are measured from the top of the page
    def centered(text: str, size: int, top: float):
        c.setFont("Helvetica", size)
        c.drawCentredString(CENTER_X, PAGE_HEIGHT - top * mm, text)

    centered("Certificado de Participación", 24, 40)

    c.setLineWidth(0.5)
    c.line(30 * mm, PAGE_HEIGHT - 45 * mm, 180 * mm, PAGE_HEIGHT - 45 * mm)

    centered("Esto es para certificar que", 16, 80)
    centered(profile.email, 20, 100)
    centered("ha participado en", 16, 120)
    centered(event.title, 20, 140)
    centered(f"on {format_event_date(event.date)}", 14, 160)

    c.showPage()
    c.save()
    return buffer.getvalue()
