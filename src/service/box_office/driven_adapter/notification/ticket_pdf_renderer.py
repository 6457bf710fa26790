"""
E-ticket PDF rendering

One A4 page per ticket: header band, event and performance block, seat and
price, customer, a scannable QR code and a Code 128 barcode of barcode_data.
"""

from io import BytesIO

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import code128
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.ticket_delivery import TicketDocument
from src.service.box_office.app.interface.i_ticket_pdf_renderer import ITicketPdfRenderer


NAVY = '#1F2A44'
GOLD = '#C9A227'
GRAY = '#5A5A5A'
QR_SIZE = 150


class ReportlabTicketPdfRenderer(ITicketPdfRenderer):
    def __init__(self, box_office_name: str):
        self.box_office_name = box_office_name

    def _draw_header(self, c: canvas.Canvas, document: TicketDocument, width: float, height: float):
        c.setFillColor(colors.HexColor(NAVY))
        c.rect(0, height - 110, width, 110, fill=1, stroke=0)
        c.setFillColor(colors.white)
        c.setFont('Helvetica-Bold', 26)
        c.drawString(40, height - 60, 'E-Ticket')
        c.setFont('Helvetica', 12)
        c.drawString(40, height - 85, self.box_office_name)
        c.setFillColor(colors.HexColor(GOLD))
        c.setFont('Helvetica-Bold', 14)
        c.drawRightString(width - 40, height - 60, document.ticket_number)

    def _draw_field(self, c: canvas.Canvas, x: float, y: float, label: str, value: str):
        c.setFillColor(colors.HexColor(GRAY))
        c.setFont('Helvetica', 9)
        c.drawString(x, y, label.upper())
        c.setFillColor(colors.black)
        c.setFont('Helvetica-Bold', 13)
        c.drawString(x, y - 16, value)

    def _draw_qr(self, c: canvas.Canvas, document: TicketDocument, x: float, y: float):
        widget = QrCodeWidget(document.qr_code_data)
        x1, y1, x2, y2 = widget.getBounds()
        drawing = Drawing(
            QR_SIZE,
            QR_SIZE,
            transform=[QR_SIZE / (x2 - x1), 0, 0, QR_SIZE / (y2 - y1), 0, 0],
        )
        drawing.add(widget)
        renderPDF.draw(drawing, c, x, y)

    @Logger.io
    def render(self, *, document: TicketDocument) -> bytes:
        buffer = BytesIO()
        width, height = A4
        c = canvas.Canvas(buffer, pagesize=A4)
        c.setTitle(f'Ticket {document.ticket_number}')

        self._draw_header(c, document, width, height)

        y = height - 160
        c.setFillColor(colors.black)
        c.setFont('Helvetica-Bold', 20)
        c.drawString(40, y, document.event_title)
        c.setFont('Helvetica', 11)
        venue = document.venue_name
        if document.venue_address:
            venue = f'{venue}, {document.venue_address}'
        c.drawString(40, y - 20, venue)

        y -= 70
        self._draw_field(c, 40, y, 'Date', document.performance_date.strftime('%A, %d %B %Y'))
        self._draw_field(c, 300, y, 'Time', f'{document.start_time} - {document.end_time}')
        y -= 50
        self._draw_field(c, 40, y, 'Seat', document.seat_label)
        self._draw_field(c, 300, y, 'Category', document.category.title())
        y -= 50
        self._draw_field(c, 40, y, 'Ticket holder', document.customer_name)
        self._draw_field(c, 300, y, 'Price', f'${document.price:,.2f}')

        self._draw_qr(c, document, 40, y - 60 - QR_SIZE)

        barcode = code128.Code128(document.barcode_data, barHeight=50, barWidth=0.9)
        barcode.drawOn(c, 220, y - 60 - QR_SIZE + 40)
        c.setFont('Helvetica', 8)
        c.setFillColor(colors.HexColor(GRAY))
        c.drawString(230, y - 60 - QR_SIZE + 28, document.barcode_data)

        c.setFont('Helvetica-Oblique', 9)
        c.drawCentredString(width / 2, 40, 'Present this ticket at the venue entrance. Valid for one admission.')

        c.showPage()
        c.save()
        return buffer.getvalue()
