# backend/fee_estimator/services/estimate/estimate_renderer.py
"""
御見積書 Word 文档渲染

纯代码生成（python-docx），输出到内存 BytesIO，不落盘。
"""
import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt

from ..fee_calculation.exceptions import EstimateRenderError
from ..fee_calculation.formatting import format_currency
from .models import EstimateDocument

logger = logging.getLogger(__name__)

ESTIMATE_TITLE = "御 見 積 書"
JAPANESE_FONT = "MS Mincho"


def estimate_filename(now: Optional[datetime] = None) -> str:
    """Estimate_YYYYMMDD_HHMM.docx"""
    now = now or datetime.now()
    return f"Estimate_{now:%Y%m%d_%H%M}.docx"


class EstimateRenderer:
    """见积书渲染器"""

    def render(self, estimate: EstimateDocument) -> BytesIO:
        try:
            doc = Document()
            self._setup_styles(doc)
            self._add_title(doc, estimate)
            self._add_header(doc, estimate)
            self._add_amount_table(doc, estimate)
            self._add_notes(doc, estimate)
            self._add_office_signature(doc, estimate)

            buffer = BytesIO()
            doc.save(buffer)
            buffer.seek(0)
        except Exception as e:
            logger.error(f"[Estimate] 见积书渲染失败: {str(e)}", exc_info=True)
            raise EstimateRenderError("見積書の生成に失敗しました", original_error=e) from e

        logger.info(f"[Estimate] 见积书渲染成功: category={estimate.category.value}, total={estimate.total}")
        return buffer

    def _setup_styles(self, doc: Document):
        style = doc.styles['Normal']
        style.font.name = JAPANESE_FONT
        style.font.size = Pt(11)
        # 东亚字体需单独指定
        style.element.get_or_add_rPr().get_or_add_rFonts().set(qn('w:eastAsia'), JAPANESE_FONT)

    def _add_title(self, doc: Document, estimate: EstimateDocument):
        heading = doc.add_heading(ESTIMATE_TITLE, level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        for run in heading.runs:
            run.font.size = Pt(20)
            run.font.bold = True

        date_paragraph = doc.add_paragraph(estimate.issue_date)
        date_paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT

    def _add_header(self, doc: Document, estimate: EstimateDocument):
        """宛名 + 事务所信息 + 案件名"""
        client = doc.add_paragraph()
        client_run = client.add_run(estimate.client_name)
        client_run.font.size = Pt(14)
        client_run.font.underline = True
        doc.add_paragraph("下記のとおりお見積り申し上げます。")

        office_lines = [estimate.office_name, estimate.lawyer_name]
        if estimate.address:
            office_lines.append(estimate.address)
        if estimate.tel:
            office_lines.append(f"TEL: {estimate.tel}")
        for index, line in enumerate(office_lines):
            p = doc.add_paragraph()
            p.alignment = WD_ALIGN_PARAGRAPH.RIGHT
            run = p.add_run(line)
            run.bold = index == 0

        case = doc.add_paragraph()
        case.add_run("案件名: ").bold = True
        case.add_run(estimate.case_title)

    def _add_amount_table(self, doc: Document, estimate: EstimateDocument):
        table = doc.add_table(rows=1, cols=2)
        table.style = 'Table Grid'

        header = table.rows[0].cells
        header[0].text = "項目"
        header[1].text = "金額（税抜）"

        for row in estimate.rows:
            self._add_row(table, row.label, format_currency(row.amount))

        self._add_row(table, "小計", format_currency(estimate.subtotal))
        self._add_row(table, estimate.tax_label, format_currency(estimate.tax))
        self._add_row(table, "合計金額", format_currency(estimate.total), bold=True)

    def _add_row(self, table, label: str, amount: str, bold: bool = False):
        cells = table.add_row().cells
        cells[0].text = label
        cells[1].text = amount
        cells[1].paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.RIGHT
        if bold:
            for cell in cells:
                for run in cell.paragraphs[0].runs:
                    run.bold = True

    def _add_notes(self, doc: Document, estimate: EstimateDocument):
        doc.add_paragraph()
        doc.add_heading("備考・特記事項", level=2)
        for line in estimate.notes:
            doc.add_paragraph(line)

        doc.add_paragraph(f"見積有効期限: {estimate.validity}")

    def _add_office_signature(self, doc: Document, estimate: EstimateDocument):
        doc.add_paragraph()
        for line in (estimate.office_name, estimate.lawyer_name, "印"):
            p = doc.add_paragraph(line)
            p.alignment = WD_ALIGN_PARAGRAPH.RIGHT


def render_estimate_docx(estimate: EstimateDocument) -> BytesIO:
    return EstimateRenderer().render(estimate)
