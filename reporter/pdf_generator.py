# DEPENDENCIES
from typing import Any
from io import BytesIO
from typing import Dict
from typing import List
from typing import Optional
from datetime import datetime
from reportlab.lib import colors
from reportlab.platypus import Table
from reportlab.lib.units import inch
from reportlab.platypus import Spacer
from xml.sax.saxutils import escape
from reportlab.lib.enums import TA_LEFT
from reportlab.platypus import Paragraph
from reportlab.platypus import TableStyle
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.enums import TA_JUSTIFY
from reportlab.lib.pagesizes import letter
from reportlab.platypus import KeepTogether
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import SimpleDocTemplate
from reportlab.lib.styles import getSampleStyleSheet

from config.settings import settings


class LeaseReportGenerator:
    """
    PDF report of a lease analysis: summary, flag table, explanations with citations, disclaimer
    """
    SEVERITY_COLORS = {"high"    : '#dc2626',
                       "warning" : '#f97316',
                       "info"    : '#2563eb',
                      }


    def __init__(self):
        self.styles        = getSampleStyleSheet()

        self._setup_custom_styles()

        self.page_width    = letter[0]
        self.page_height   = letter[1]
        self.margin        = settings.PDF_MARGIN * inch
        self.content_width = self.page_width - 2 * self.margin


    def _setup_custom_styles(self):
        body_size = settings.PDF_FONT_SIZE

        self.styles.add(ParagraphStyle(name       = 'ReportTitle',
                                       parent     = self.styles['Heading1'],
                                       fontSize   = 20,
                                       textColor  = colors.HexColor('#1a1a1a'),
                                       spaceAfter = 12,
                                       alignment  = TA_CENTER,
                                       fontName   = 'Helvetica-Bold',
                                      )
                       )

        self.styles.add(ParagraphStyle(name        = 'SectionHeading',
                                       parent      = self.styles['Heading2'],
                                       fontSize    = 14,
                                       textColor   = colors.HexColor('#1a1a1a'),
                                       spaceAfter  = 8,
                                       spaceBefore = 14,
                                       fontName    = 'Helvetica-Bold',
                                      )
                       )

        self.styles.add(ParagraphStyle(name        = 'FlagHeading',
                                       parent      = self.styles['Normal'],
                                       fontSize    = body_size + 1,
                                       textColor   = colors.HexColor('#333333'),
                                       spaceAfter  = 4,
                                       spaceBefore = 10,
                                       fontName    = 'Helvetica-Bold',
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'CustomBodyText',
                                       parent    = self.styles['Normal'],
                                       fontSize  = body_size,
                                       leading   = body_size + 3,
                                       textColor = colors.HexColor('#333333'),
                                       alignment = TA_JUSTIFY,
                                       fontName  = 'Helvetica',
                                      )
                       )

        self.styles.add(ParagraphStyle(name       = 'Excerpt',
                                       parent     = self.styles['Normal'],
                                       fontSize   = body_size - 1,
                                       leading    = body_size + 2,
                                       textColor  = colors.HexColor('#444444'),
                                       fontName   = 'Helvetica-Oblique',
                                       leftIndent = 12,
                                       spaceAfter = 4,
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'TableHeader',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 8,
                                       leading   = 10,
                                       textColor = colors.white,
                                       fontName  = 'Helvetica-Bold',
                                       alignment = TA_CENTER,
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'TableCell',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 8,
                                       leading   = 10,
                                       textColor = colors.HexColor('#333333'),
                                       fontName  = 'Helvetica',
                                       alignment = TA_LEFT,
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'SmallText',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 7,
                                       leading   = 9,
                                       textColor = colors.HexColor('#666666'),
                                       fontName  = 'Helvetica',
                                      )
                       )


    @staticmethod
    def _field(data: Dict, key: str) -> str:
        # Posted results may carry null or non-string values
        value = data.get(key)

        return escape(str(value)) if value is not None else ''


    def _create_header_footer(self, canvas, doc):
        canvas.saveState()

        canvas.setFont('Helvetica-Bold', 7)
        canvas.setFillColor(colors.black)
        canvas.drawString(self.margin, self.page_height - 0.6 * inch, "Lease Risk Analysis Report")

        canvas.setFont('Helvetica', 7)
        canvas.setFillColor(colors.HexColor('#666666'))
        canvas.drawString(self.page_width - self.margin - 0.8 * inch, 0.5 * inch, f"Page {doc.page}")
        canvas.drawCentredString(self.page_width / 2.0, 0.5 * inch, "For informational purposes only. Not legal advice.")

        canvas.restoreState()


    def generate_report(self, analysis_result: Dict[str, Any], output_path: Optional[str] = None) -> BytesIO:
        """
        Render an analysis result

        Arguments:
        ----------
            analysis_result { dict } : AnalysisResult.to_dict() output

            output_path     { str }  : Write to this file instead of memory

        Returns:
        --------
                 { BytesIO }         : PDF bytes, rewound (empty when written to output_path)
        """
        buffer = BytesIO()

        doc    = SimpleDocTemplate(output_path or buffer,
                                   pagesize     = letter,
                                   rightMargin  = self.margin,
                                   leftMargin   = self.margin,
                                   topMargin    = self.margin + 0.25 * inch,
                                   bottomMargin = self.margin + 0.25 * inch,
                                   title        = "Lease Risk Analysis Report",
                                  )

        story  = list()

        story.extend(self._build_overview(analysis_result))
        story.extend(self._build_flag_table(analysis_result.get('flags') or []))
        story.extend(self._build_flag_details(analysis_result.get('flags') or []))

        story.append(Spacer(1, 0.3 * inch))
        story.append(Paragraph(self._field(analysis_result, 'disclaimer'), self.styles['SmallText']))

        doc.build(story, onFirstPage = self._create_header_footer, onLaterPages = self._create_header_footer)

        buffer.seek(0)

        return buffer


    def _build_overview(self, result: Dict) -> List:
        elements     = list()
        jurisdiction = result.get('jurisdiction') or 'Not detected (all jurisdictions searched)'
        flags        = result.get('flags') or []
        high_count   = sum(1 for flag in flags if flag.get('severity') == 'high')

        elements.append(Paragraph("Lease Risk Analysis Report", self.styles['ReportTitle']))
        elements.append(Paragraph(f"<b>Jurisdiction:</b> {escape(str(jurisdiction))} | <b>Flags:</b> {len(flags)} | <b>High risk:</b> {high_count} | "
                                  f"<b>Generated:</b> {datetime.now().strftime('%Y-%m-%d %H:%M')}",
                                  self.styles['CustomBodyText'],
                                 )
                       )

        elements.append(Paragraph("Summary", self.styles['SectionHeading']))
        elements.append(Paragraph(self._field(result, 'summary'), self.styles['CustomBodyText']))

        return elements


    def _build_flag_table(self, flags: List[Dict]) -> List:
        elements = [Paragraph("Flagged Clauses", self.styles['SectionHeading'])]

        if not flags:
            elements.append(Paragraph("No risky clauses were flagged.", self.styles['CustomBodyText']))
            return elements

        rows     = [[Paragraph('Severity', self.styles['TableHeader']),
                     Paragraph('Type', self.styles['TableHeader']),
                     Paragraph('Excerpt', self.styles['TableHeader']),
                   ]]

        for flag in flags:
            rows.append([Paragraph(self._field(flag, 'severity').upper(), self.styles['TableCell']),
                         Paragraph(self._field(flag, 'type'), self.styles['TableCell']),
                         Paragraph(self._field(flag, 'excerpt'), self.styles['TableCell']),
                       ])

        table    = Table(rows, colWidths = [0.9 * inch, 1.4 * inch, self.content_width - 2.3 * inch], repeatRows = 1)
        commands = [('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#374151')),
                    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
                    ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#d1d5db')),
                   ]

        for row_index, flag in enumerate(flags, start = 1):
            color = colors.HexColor(self.SEVERITY_COLORS.get(flag.get('severity'), '#6b7280'))
            commands.append(('TEXTCOLOR', (0, row_index), (0, row_index), color))

        table.setStyle(TableStyle(commands))
        elements.append(table)

        return elements


    def _build_flag_details(self, flags: List[Dict]) -> List:
        if not flags:
            return []

        elements = [Paragraph("Explanations and Legal References", self.styles['SectionHeading'])]

        for index, flag in enumerate(flags, start = 1):
            block     = [Paragraph(f"{index}. {self._field(flag, 'type')} ({self._field(flag, 'severity')})", self.styles['FlagHeading']),
                         Paragraph(f"\"{self._field(flag, 'excerpt')}\"", self.styles['Excerpt']),
                         Paragraph(self._field(flag, 'explanation'), self.styles['CustomBodyText']),
                        ]

            reference = flag.get('legal_reference')

            if reference:
                block.append(Spacer(1, 0.05 * inch))
                block.append(Paragraph(f"<b>Reference:</b> {self._field(reference, 'title')} ({self._field(reference, 'jurisdiction')})", self.styles['SmallText']))

            elements.append(KeepTogether(block))

        return elements



def generate_pdf_report(analysis_result: Dict[str, Any], output_path: Optional[str] = None) -> BytesIO:
    """
    Convenience function to generate PDF report
    """
    generator = LeaseReportGenerator()

    return generator.generate_report(analysis_result = analysis_result,
                                     output_path     = output_path,
                                    )
