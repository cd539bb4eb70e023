import io
import pdfplumber


def _page_texts(pdf_bytes: bytes) -> list[str]:
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def extract_page_text(pdf_bytes: bytes, page_number: int) -> str:
    """Text of a single page. page_number is 1-based."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        if page_number < 1 or page_number > len(pdf.pages):
            raise ValueError(f"Page {page_number} out of range (document has {len(pdf.pages)} pages)")
        return pdf.pages[page_number - 1].extract_text() or ""


def mark_pages(page_texts: list[str]) -> str:
    """Wraps each page in the OCR page markers the batch orchestrator splits on."""
    return "\n".join(
        f"==Start of OCR for page {number}==\n{text}\n==End of OCR for page {number}=="
        for number, text in enumerate(page_texts, start=1)
    )


def extract_marked_text(pdf_bytes: bytes) -> str:
    return mark_pages(_page_texts(pdf_bytes))


def extract_full_text(pdf_bytes: bytes) -> str:
    return "\n".join(text for text in _page_texts(pdf_bytes) if text).strip()
