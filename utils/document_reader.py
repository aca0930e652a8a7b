# DEPENDENCIES
import io
from typing import Union
from typing import BinaryIO
from PyPDF2 import PdfReader
from docx import Document
from zipfile import BadZipFile
from PyPDF2.errors import PdfReadError
from docx.opc.exceptions import PackageNotFoundError

from utils.logger import log_info
from utils.logger import log_warning


class DocumentReader:
    """
    Extract plain text from uploaded lease files (PDF, DOCX, TXT)
    """
    SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


    def read_file(self, file_obj: Union[bytes, BinaryIO], extension: str) -> str:
        """
        Read a file's text

        Arguments:
        ----------
            file_obj  { bytes | file } : Raw bytes or a binary file object

            extension { str }          : File extension including the dot (".pdf")

        Raises:
        -------
            ValueError                 : Unsupported extension, or a file that cannot be parsed

        Returns:
        --------
                    { str }            : Extracted text, paragraphs separated by blank lines
        """
        extension = extension.lower()

        if extension not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type '{extension}'. Supported: {', '.join(self.SUPPORTED_EXTENSIONS)}")

        data = file_obj if isinstance(file_obj, bytes) else file_obj.read()

        if (extension == ".pdf"):
            text = self._read_pdf(data)

        elif (extension == ".docx"):
            text = self._read_docx(data)

        else:
            text = self._read_txt(data)

        log_info("Document text extracted", extension = extension, bytes = len(data), characters = len(text))

        return text


    @staticmethod
    def _read_pdf(data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages  = [page.extract_text() or "" for page in reader.pages]

        except (PdfReadError, ValueError, KeyError) as e:
            raise ValueError(f"Failed to parse PDF: {e}. Please ensure the file is a valid PDF.") from e

        return "\n\n".join(page.strip() for page in pages if page.strip())


    @staticmethod
    def _read_docx(data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))

        except (PackageNotFoundError, BadZipFile, ValueError, KeyError) as e:
            raise ValueError(f"Failed to parse DOCX: {e}") from e

        parts = [paragraph.text.strip() for paragraph in document.paragraphs if paragraph.text.strip()]

        # Lease schedules (rent, deposit, fees) are often laid out as tables
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]

                if cells:
                    parts.append(" | ".join(cells))

        return "\n\n".join(parts)


    @staticmethod
    def _read_txt(data: bytes) -> str:
        try:
            return data.decode("utf-8")

        except UnicodeDecodeError:
            log_warning("Text file is not UTF-8, decoding as latin-1")
            return data.decode("iso-8859-1")
