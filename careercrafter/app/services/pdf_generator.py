"""
Resume export: format the aggregate resume as plain text, then render it to PDF with reportlab.
"""
import re
from dataclasses import dataclass
from io import BytesIO

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from careercrafter.app.core.config import PDF_DEFAULT_TITLE, PDF_FONT_SIZE_BODY, PDF_FONT_SIZE_TITLE, PDF_LINE_HEIGHT
from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.schemas.resume import ResumeDetail

logger = get_logger("services.pdf_generator")

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def wrap_text_lines(text: str, max_width: float, font_name: str = "Helvetica", font_size: int = PDF_FONT_SIZE_BODY) -> list[str]:
    """Break text into lines no wider than max_width points. Blank lines and leading indentation are kept."""
    lines = []
    for raw in (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        stripped = raw.lstrip()
        if not stripped:
            lines.append("")
            continue
        indent = raw[: len(raw) - len(stripped)]
        available = max_width - stringWidth(indent, font_name, font_size)
        for part in simpleSplit(stripped, font_name, font_size, available) or [stripped]:
            lines.append(indent + part)
    return lines


def text_to_pdf_bytes(text: str, title: str | None = None) -> bytes:
    """
    Generate a PDF from plain text. Preserves line breaks and wraps long lines to the page width.
    Returns PDF file content as bytes.
    """
    title_val = title or PDF_DEFAULT_TITLE
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    c.setTitle(title_val[:80])
    width, height = letter
    margin = inch
    x, y = margin, height - margin
    c.setFont("Helvetica", PDF_FONT_SIZE_TITLE)
    c.drawString(x, y, title_val[:80])
    y -= PDF_LINE_HEIGHT * 1.5
    c.setFont("Helvetica", PDF_FONT_SIZE_BODY)
    body = (text or "").strip()
    if body:
        for line in wrap_text_lines(body, width - 2 * margin):
            if y < margin + PDF_LINE_HEIGHT:
                c.showPage()
                c.setFont("Helvetica", PDF_FONT_SIZE_BODY)
                y = height - margin
            c.drawString(x, y, line)
            y -= PDF_LINE_HEIGHT
    else:
        c.drawString(x, y, "(No content)")
    c.save()
    return buffer.getvalue()


def format_month_year(month: int | None, year: int | None) -> str:
    if not year:
        return ""
    if month and 1 <= month <= 12:
        return f"{_MONTHS[month - 1]} {year}"
    return str(year)


def format_date_range(entry) -> str:
    """'Jan 2020 - Present' for current entries; stored end dates are ignored then."""
    start = format_month_year(entry.startMonth, entry.startYear)
    if entry.isPresent:
        return f"{start} - Present"
    end = format_month_year(entry.endMonth, entry.endYear)
    return f"{start} - {end}" if end else start


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


class ResumeDocumentExporter:
    """Turns an aggregate resume into a downloadable PDF."""

    def render_text(self, resume: ResumeDetail) -> str:
        info = resume.personalInfo
        lines = [
            f"Resume for {(info.fullName if info else None) or 'Unknown'}",
            "",
            f"Email: {(info.email if info else None) or 'Not provided'}",
            f"Phone: {(info.phone if info else None) or 'Not provided'}",
        ]
        if info and info.location:
            lines.append(f"Location: {info.location}")
        for label, value in (("Website", info and info.website), ("LinkedIn", info and info.linkedin), ("GitHub", info and info.github)):
            if value:
                lines.append(f"{label}: {value}")

        lines += ["", "Professional Summary:", (info.summary if info else None) or "Not provided", ""]

        lines.append("Work Experience:")
        if resume.workExperience:
            for exp in resume.workExperience:
                lines.append(f"- {exp.jobTitle} at {exp.company} ({format_date_range(exp)})")
                if exp.description:
                    lines.append(f"  {exp.description}")
                for achievement in exp.achievements:
                    lines.append(f"  • {achievement}")
        else:
            lines.append("None listed")
        lines.append("")

        lines.append("Education:")
        if resume.education:
            for edu in resume.education:
                degree = f"{edu.degree} in {edu.fieldOfStudy}" if edu.fieldOfStudy else edu.degree
                lines.append(f"- {degree} from {edu.institution} ({format_date_range(edu)})")
                if edu.gpa:
                    lines.append(f"  GPA: {edu.gpa}")
                for achievement in edu.achievements:
                    lines.append(f"  • {achievement}")
        else:
            lines.append("None listed")
        lines.append("")

        lines.append("Skills:")
        if resume.skills:
            lines.append(", ".join(f"{s.name} ({s.proficiency}/5)" for s in resume.skills))
        else:
            lines.append("None listed")
        return "\n".join(lines)

    def export(self, resume: ResumeDetail) -> ExportedDocument:
        text = self.render_text(resume)
        content = text_to_pdf_bytes(text, resume.title)
        safe_title = re.sub(r'[\\/:*?"<>|\r\n]+', "_", resume.title).strip() or PDF_DEFAULT_TITLE
        logger.info("Exported resume resume_id=%s bytes=%d", resume.id, len(content))
        return ExportedDocument(filename=f"{safe_title}.pdf", content=content)
