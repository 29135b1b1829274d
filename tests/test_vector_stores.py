import pytest

from gptwire.api import HttpMethod, Pagination
from gptwire.vector_stores import (
    VectorStoreExpires,
    VectorStoreFileBatchRequest,
    VectorStoreFileRequest,
    VectorStoreRequest,
    cancel_vector_store_file_batch,
    create_vector_store,
    create_vector_store_file,
    create_vector_store_file_batch,
    delete_vector_store,
    delete_vector_store_file,
    list_vector_store_files,
    list_vector_store_files_in_batch,
    list_vector_stores,
    modify_vector_store,
    retrieve_vector_store,
    retrieve_vector_store_file,
    retrieve_vector_store_file_batch,
)

BASE = "https://api.example.com/v1"
STORE_ID = "vs_abc123"
STORE_NAME = "TestStore"
FILE_ID = "file-abc123"
BATCH_ID = "vsfb_abc123"
PAGE = Pagination(limit=20, order="desc", after="vs_abc122", before="vs_abc123")
PAGE_QUERY = "?after=vs_abc122&before=vs_abc123&limit=20&order=desc"


def test_create_vector_store():
    call = create_vector_store(VectorStoreRequest(name=STORE_NAME))
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == BASE + "/vector_stores"
    assert call.body == {"name": STORE_NAME}
    assert call.headers("v2") == {
        "Content-Type": "application/json",
        "OpenAI-Beta": "assistants=v2",
    }
    store = call.parse(
        {
            "id": STORE_ID,
            "object": "vector_store",
            "created_at": 1234567890,
            "name": STORE_NAME,
            "file_counts": {"in_progress": 0, "completed": 0, "failed": 0, "cancelled": 0, "total": 0},
            "expires_after": None,
            "expires_at": None,
        }
    )
    assert store.id == STORE_ID
    assert store.name == STORE_NAME
    assert store.created_at == 1234567890
    assert store.file_counts.total == 0
    assert store.expires_after is None


def test_vector_store_request_full_body():
    request = VectorStoreRequest(
        name="n",
        file_ids=["f1"],
        expires_after=VectorStoreExpires(anchor="last_active_at", days=7),
        metadata={"k": "v"},
    )
    assert request.to_dict() == {
        "name": "n",
        "file_ids": ["f1"],
        "expires_after": {"anchor": "last_active_at", "days": 7},
        "metadata": {"k": "v"},
    }
    assert VectorStoreRequest().to_dict() == {}


def test_retrieve_vector_store():
    call = retrieve_vector_store(STORE_ID)
    assert call.method == HttpMethod.GET
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}"
    assert call.headers("v2") == {"OpenAI-Beta": "assistants=v2"}
    store = call.parse(
        {
            "id": STORE_ID,
            "name": STORE_NAME,
            "expires_after": {"anchor": "last_active_at", "days": 3},
            "expires_at": 99,
        }
    )
    assert store.expires_after == VectorStoreExpires(anchor="last_active_at", days=3)
    assert store.expires_at == 99


def test_modify_vector_store():
    call = modify_vector_store(STORE_ID, VectorStoreRequest(name=STORE_NAME))
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}"
    assert call.body == {"name": STORE_NAME}
    assert call.parse({"id": STORE_ID, "name": STORE_NAME}).name == STORE_NAME


def test_delete_vector_store():
    call = delete_vector_store(STORE_ID)
    assert call.method == HttpMethod.DELETE
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}"
    result = call.parse(
        {"id": "vectorstore_abc123", "object": "vector_store.deleted", "deleted": True}
    )
    assert result.deleted is True
    assert result.object == "vector_store.deleted"


def test_list_vector_stores():
    call = list_vector_stores(PAGE)
    assert call.method == HttpMethod.GET
    assert call.url(BASE) == BASE + "/vector_stores" + PAGE_QUERY
    page = call.parse(
        {
            "last_id": STORE_ID,
            "first_id": STORE_ID,
            "data": [{"id": STORE_ID, "object": "vector_store", "name": STORE_NAME}],
        }
    )
    assert page.first_id == STORE_ID
    assert page.last_id == STORE_ID
    assert [s.name for s in page.vector_stores] == [STORE_NAME]
    assert page.has_more is False


def test_list_vector_stores_without_pagination():
    assert list_vector_stores().url(BASE) == BASE + "/vector_stores"


def test_create_vector_store_file():
    call = create_vector_store_file(STORE_ID, VectorStoreFileRequest(file_id=FILE_ID))
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/files"
    assert call.body == {"file_id": FILE_ID}
    created = call.parse(
        {"id": FILE_ID, "object": "vector_store.file", "vector_store_id": STORE_ID}
    )
    assert created.id == FILE_ID
    assert created.vector_store_id == STORE_ID


def test_list_vector_store_files():
    call = list_vector_store_files(STORE_ID, PAGE)
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/files" + PAGE_QUERY
    page = call.parse({"data": [{"id": FILE_ID, "created_at": 1234567890}]})
    assert page.vector_store_files[0].id == FILE_ID
    assert page.first_id is None


def test_retrieve_vector_store_file():
    call = retrieve_vector_store_file(STORE_ID, FILE_ID)
    assert call.method == HttpMethod.GET
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/files/{FILE_ID}"
    got = call.parse({"id": FILE_ID, "status": "completed"})
    assert got.status == "completed"


def test_delete_vector_store_file_does_not_parse():
    call = delete_vector_store_file(STORE_ID, FILE_ID)
    assert call.method == HttpMethod.DELETE
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/files/{FILE_ID}"
    assert call.parse is None
    assert call.body is None


def test_create_vector_store_file_batch():
    call = create_vector_store_file_batch(
        STORE_ID, VectorStoreFileBatchRequest(file_ids=[FILE_ID])
    )
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/file_batches"
    assert call.body == {"file_ids": [FILE_ID]}
    batch = call.parse(
        {"id": BATCH_ID, "status": "completed", "file_counts": {"completed": 1}}
    )
    assert batch.file_counts.completed == 1
    assert batch.status == "completed"


def test_file_batch_request_none_is_null():
    assert VectorStoreFileBatchRequest().to_dict() == {"file_ids": None}


def test_retrieve_vector_store_file_batch():
    call = retrieve_vector_store_file_batch(STORE_ID, BATCH_ID)
    assert call.method == HttpMethod.GET
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/file_batches/{BATCH_ID}"
    assert call.parse({"id": BATCH_ID}).id == BATCH_ID


def test_cancel_vector_store_file_batch():
    call = cancel_vector_store_file_batch(STORE_ID, BATCH_ID)
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == f"{BASE}/vector_stores/{STORE_ID}/file_batches/{BATCH_ID}/cancel"
    assert call.body is None
    assert call.parse({"id": BATCH_ID, "status": "cancelling"}).status == "cancelling"


@pytest.mark.parametrize("pagination,suffix", [(PAGE, PAGE_QUERY), (None, "")])
def test_list_vector_store_files_in_batch(pagination, suffix):
    call = list_vector_store_files_in_batch(STORE_ID, BATCH_ID, pagination)
    assert call.url(BASE) == (
        f"{BASE}/vector_stores/{STORE_ID}/file_batches/{BATCH_ID}/files" + suffix
    )
    page = call.parse({"data": [{"id": FILE_ID}]})
    assert [f.id for f in page.vector_store_files] == [FILE_ID]