import asyncio
import json

import pytest

from digitizer.models.document import (
    Article,
    ArticleSummary,
    ExtractedData,
    HeadlineSummary,
    NewspaperDocument,
    SummaryData,
)
from digitizer.services.database import DatabaseFactory, JSONAdapter, MemoryAdapter


def run(coro):
    return asyncio.run(coro)


def make_document(doc_id: str, **extracted) -> NewspaperDocument:
    return NewspaperDocument(
        id=doc_id,
        filename=f"{doc_id}-page.jpg",
        original_name="page.jpg",
        image_path=f"/uploads/{doc_id}-page.jpg",
        processed_image_path=f"/uploads/{doc_id}-page_processed.jpg",
        upload_date="2024-06-10T06:13:20.000Z",
        extracted_data=ExtractedData(**extracted),
        summary_data=SummaryData(overall_summary="সারাংশ"),
    )


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        adapter = MemoryAdapter()
    else:
        adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())
    return adapter


def test_create_and_get(store):
    run(store.create_document(make_document("1", headlines=["শিরোনাম"])))

    fetched = run(store.get_document("1"))
    assert fetched.id == "1"
    assert fetched.extracted_data.headlines == ["শিরোনাম"]
    assert run(store.get_document("missing")) is None


def test_list_preserves_insertion_order(store):
    for doc_id in ["3", "1", "2"]:
        run(store.create_document(make_document(doc_id)))

    assert [doc.id for doc in run(store.get_all_documents())] == ["3", "1", "2"]


def test_returned_documents_are_copies(store):
    run(store.create_document(make_document("1", headlines=["original"])))

    fetched = run(store.get_document("1"))
    fetched.extracted_data.headlines.append("mutated")

    assert run(store.get_document("1")).extracted_data.headlines == ["original"]


def test_update_replaces_only_given_fields(store):
    run(store.create_document(make_document("1", headlines=["h"])))

    new_summary = SummaryData(overall_summary="নতুন")
    updated = run(store.update_document("1", {"summary_data": new_summary}))

    assert updated.summary_data.overall_summary == "নতুন"
    assert updated.extracted_data.headlines == ["h"]
    assert run(store.get_document("1")).summary_data.overall_summary == "নতুন"
    assert run(store.update_document("missing", {"summary_data": new_summary})) is None


def test_delete_returns_removed_document(store):
    run(store.create_document(make_document("1")))

    removed = run(store.delete_document("1"))
    assert removed.id == "1"
    assert run(store.get_document("1")) is None
    assert run(store.delete_document("1")) is None


def test_search_covers_every_text_field(store):
    doc = make_document(
        "1",
        all_text="সম্পূর্ণ লেখা",
        headlines=["প্রধান শিরোনাম"],
        articles=[Article(headline="খেলার খবর", content="ক্রিকেট ম্যাচ")],
    )
    doc.summary_data = SummaryData(
        overall_summary="Overall Summary",
        headline_summaries=[HeadlineSummary(headline="x", summary="headline digest")],
        article_summaries=[ArticleSummary(headline="y", summary="Article Digest")],
    )
    run(store.create_document(doc))
    run(store.create_document(make_document("2", all_text="অন্য কিছু")))

    for query in ["লেখা", "প্রধান", "খেলার", "ক্রিকেট", "overall summary", "HEADLINE DIGEST", "article digest"]:
        assert [d.id for d in run(store.search_documents(query))] == ["1"], query


def test_search_is_case_insensitive_on_all_text(store):
    run(store.create_document(make_document("1", all_text="Dhaka Metro Rail")))

    assert len(run(store.search_documents("dhaka metro"))) == 1
    assert len(run(store.search_documents("DHAKA"))) == 1


def test_search_without_match_or_query(store):
    run(store.create_document(make_document("1", all_text="কিছু লেখা")))

    assert run(store.search_documents("অমিল")) == []
    assert run(store.search_documents("")) == []
    assert run(store.search_documents("   ")) == []
    assert run(store.search_documents(None)) == []


def test_json_adapter_persists_across_instances(tmp_path):
    first = JSONAdapter(data_dir=tmp_path)
    run(first.initialize())
    run(first.create_document(make_document("1", headlines=["স্থায়ী"])))
    run(first.create_document(make_document("2")))
    run(first.delete_document("2"))

    second = JSONAdapter(data_dir=tmp_path)
    run(second.initialize())

    documents = run(second.get_all_documents())
    assert [doc.id for doc in documents] == ["1"]
    assert documents[0].extracted_data.headlines == ["স্থায়ী"]


def test_json_adapter_writes_camel_case_records(tmp_path):
    adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())
    run(adapter.create_document(make_document("1")))

    records = json.loads((tmp_path / "documents.json").read_text(encoding="utf-8"))
    assert records[0]["originalName"] == "page.jpg"
    assert records[0]["extractedData"]["extractionMethod"] == "fallback"


def test_json_adapter_skips_invalid_records(tmp_path):
    valid = make_document("1").to_response()
    (tmp_path / "documents.json").write_text(json.dumps([valid, {"id": "broken"}]), encoding="utf-8")

    adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())

    assert [doc.id for doc in run(adapter.get_all_documents())] == ["1"]


def test_factory_creates_adapters(tmp_path):
    assert isinstance(DatabaseFactory.create("memory"), MemoryAdapter)
    assert isinstance(DatabaseFactory.create("json", data_dir=str(tmp_path)), JSONAdapter)
    with pytest.raises(ValueError):
        DatabaseFactory.create("postgres")


def block_documents_file(tmp_path):
    """Turn documents.json into a non-empty directory so the next save fails."""
    target = tmp_path / "documents.json"
    if target.exists():
        target.unlink()
    target.mkdir()
    (target / "keep").write_text("x", encoding="utf-8")


def test_json_adapter_failed_create_leaves_no_record(tmp_path):
    adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())
    block_documents_file(tmp_path)

    with pytest.raises(OSError):
        run(adapter.create_document(make_document("1")))

    assert [doc.id for doc in run(adapter.get_all_documents())] == []
    assert run(adapter.get_document("1")) is None
    assert run(adapter.search_documents("page")) == []


def test_json_adapter_failed_update_keeps_previous_record(tmp_path):
    adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())
    run(adapter.create_document(make_document("1")))
    block_documents_file(tmp_path)

    with pytest.raises(OSError):
        run(adapter.update_document("1", {"summary_data": SummaryData(overall_summary="নতুন")}))

    assert run(adapter.get_document("1")).summary_data.overall_summary == "সারাংশ"


def test_json_adapter_failed_delete_keeps_record_in_place(tmp_path):
    adapter = JSONAdapter(data_dir=tmp_path)
    run(adapter.initialize())
    for doc_id in ["1", "2", "3"]:
        run(adapter.create_document(make_document(doc_id)))
    block_documents_file(tmp_path)

    with pytest.raises(OSError):
        run(adapter.delete_document("2"))

    assert [doc.id for doc in run(adapter.get_all_documents())] == ["1", "2", "3"]
