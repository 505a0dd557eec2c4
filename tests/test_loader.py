import fitz
import pytest

from data.loader import inspect_document, is_pdf, open_document, upload_fingerprint
from models.errors import InvalidDocumentError
from models.schemas import PageRange


def make_pdf(pages, **save_options):
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def test_open_and_read_pages():
    data = make_pdf(["Photosynthesis happens in leaves.", ""])

    with open_document(data, "book.pdf") as document:
        assert document.page_count == 2
        assert "Photosynthesis happens in leaves." in document.get_page_text(1)
        assert document.get_page_text(2) == ""
        image = document.render_page(1, 1.5)
        width, height = document._doc[0].rect.width, document._doc[0].rect.height
        assert abs(image.size[0] - width * 1.5) <= 1
        assert abs(image.size[1] - height * 1.5) <= 1


def test_page_out_of_range():
    with open_document(make_pdf(["one"])) as document:
        with pytest.raises(IndexError):
            document.get_page_text(2)


def test_inspect_document_default_range():
    total, default_range = inspect_document(make_pdf(["x"] * 12))
    assert total == 12
    assert default_range == PageRange(start=1, end=10)

    total, default_range = inspect_document(make_pdf(["x"] * 3))
    assert default_range == PageRange(start=1, end=3)


def test_rejects_non_pdf():
    assert not is_pdf(b"%PDF-1.7", "notes.docx")
    with pytest.raises(InvalidDocumentError):
        open_document(b"PK\x03\x04 zip bytes")


def test_rejects_corrupt_pdf():
    with pytest.raises(InvalidDocumentError):
        open_document(b"%PDF-1.7\n garbage without objects")


def test_rejects_encrypted_pdf():
    data = make_pdf(["secret"], encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user")

    with pytest.raises(InvalidDocumentError):
        open_document(data)


def test_pdf_header_must_be_in_first_kilobyte():
    assert is_pdf(b"\x00\x00junk%PDF-1.7\n")
    assert not is_pdf(b" " * 1024 + b"%PDF-1.7\n")


def test_upload_fingerprint_tracks_content():
    first = make_pdf(["Chapter one"])
    second = make_pdf(["Chapter two", "More pages"])

    assert upload_fingerprint("book.pdf", first) == upload_fingerprint("book.pdf", first)
    assert upload_fingerprint("book.pdf", first) != upload_fingerprint("book.pdf", second)
