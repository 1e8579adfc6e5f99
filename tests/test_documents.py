import asyncio

import pytest

import documents.resolver as resolver_module
from assignments.errors import ContentExtractionFailure, SourceUnavailable
from assignments.sources import DocumentHandle
from documents.drive import list_files
from documents.resolver import (
    GoogleDocumentResolver,
    collect_document_handles,
    document_id_from_link,
    read_structural_elements,
)
from tests.fakes import make_submission
from tests.google_fakes import FakeRequest, http_error

DOC = "https://docs.google.com/document/d/{}/edit"
SHEET = "https://docs.google.com/spreadsheets/d/{}/edit"


def _paragraph(text: str) -> dict:
    return {"paragraph": {"elements": [{"textRun": {"content": text}}, {"inlineObjectElement": {}}]}}


class FakeDocsService:
    def __init__(self, documents: dict):
        self.documents_by_id = documents
        self.requested: list[str] = []

    def documents(self):
        return self

    def get(self, documentId: str) -> FakeRequest:
        self.requested.append(documentId)
        return FakeRequest(lambda: self.documents_by_id[documentId])


@pytest.fixture(autouse=True)
def _no_real_http(monkeypatch):
    monkeypatch.setattr(resolver_module, "authorized_http", lambda credentials: "authorized-http")


def test_document_id_from_link() -> None:
    assert document_id_from_link("https://docs.google.com/document/d/abc_DEF-1/edit?usp=drivesdk") == "abc_DEF-1"
    assert document_id_from_link("https://docs.google.com/document/u/0/d/xyz/edit") == "xyz"
    assert document_id_from_link("https://docs.google.com/spreadsheets/d/xyz") is None
    assert document_id_from_link(None) is None


def test_collect_handles_dedupes_and_skips_non_documents() -> None:
    submissions = [
        make_submission("w1", links=[DOC.format("d1"), SHEET.format("s1")]),
        make_submission("w1", links=[DOC.format("d2"), DOC.format("d1")]),
    ]

    handles = collect_document_handles(submissions)

    assert [handle.document_id for handle in handles] == ["d1", "d2"]


def test_read_structural_elements_walks_tables_and_toc() -> None:
    content = [
        _paragraph("Title\n"),
        {
            "table": {
                "tableRows": [
                    {"tableCells": [{"content": [_paragraph("a")]}, {"content": [_paragraph("b")]}]},
                ]
            }
        },
        {"tableOfContents": {"content": [_paragraph("Contents\n")]}},
        {"sectionBreak": {}},
    ]

    assert read_structural_elements(content) == "Title\nabContents\n"


def test_fetch_and_extract_keep_order_and_mark_failures() -> None:
    service = FakeDocsService(
        {
            "d1": {"title": "Essay", "body": {"content": [_paragraph("essay text\n")]}},
            "d2": http_error(403, "forbidden"),
            "d3": {"title": "Notes", "body": {"content": [_paragraph("notes\n")]}},
        }
    )
    resolver = GoogleDocumentResolver(service, credentials=object())
    submission = make_submission("w1", links=[DOC.format("d1"), DOC.format("d2"), DOC.format("d3")])

    handles = asyncio.run(resolver.fetch_documents([submission]))

    assert [handle.document_id for handle in handles] == ["d1", "d2", "d3"]
    assert handles[0].title == "Essay"
    assert handles[1].error
    assert asyncio.run(resolver.extract_content(handles[0])) == "essay text\n"
    assert asyncio.run(resolver.extract_content(handles[2])) == "notes\n"
    with pytest.raises(ContentExtractionFailure):
        asyncio.run(resolver.extract_content(handles[1]))


def test_extract_rejects_unfetched_or_bodyless_handles() -> None:
    resolver = GoogleDocumentResolver(FakeDocsService({}), credentials=object())

    with pytest.raises(ContentExtractionFailure):
        asyncio.run(resolver.extract_content(DocumentHandle(document_id="d1")))
    with pytest.raises(ContentExtractionFailure):
        asyncio.run(resolver.extract_content(DocumentHandle(document_id="d1", body={"title": "x"})))


class FakeDriveService:
    def __init__(self, pages):
        self.pages = pages
        self.calls: list[dict] = []

    def files(self):
        return self

    def list(self, **kwargs):
        self.calls.append(kwargs)

        def _page():
            if isinstance(self.pages, Exception):
                return self.pages
            index = int(kwargs.get("pageToken") or 0)
            response = {"files": self.pages[index]}
            if index + 1 < len(self.pages):
                response["nextPageToken"] = str(index + 1)
            return response

        return FakeRequest(_page)


def test_list_files_pages_until_limit() -> None:
    service = FakeDriveService([[{"name": "a"}, {"name": "b"}], [{"name": "c"}, {"name": "d"}]])

    files = list_files(service, limit=3)

    assert [item["name"] for item in files] == ["a", "b", "c"]
    assert service.calls[0]["orderBy"] == "modifiedByMeTime desc"
    assert "folder" in service.calls[0]["q"]
    assert service.calls[1]["pageSize"] == 1


def test_list_files_wraps_http_errors() -> None:
    with pytest.raises(SourceUnavailable):
        list_files(FakeDriveService(http_error(401, "unauthorized")))
