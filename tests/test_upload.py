"""
Tests for bulk upload submission.
"""
import time

import requests

from directory_admin import api_client, config, operations
from directory_admin.state import ERROR, SUCCESS, UploadStarted

from conftest import make_file, make_response


def _select(store, name="listings.csv"):
    operations.select_file(store, make_file(name))


def test_upload_without_file_makes_no_request(store, session):
    result = operations.submit_upload(store, session, interval=0.01)

    assert result is None
    session.post.assert_not_called()
    session.get.assert_not_called()
    assert store.state.message.text == "Please select a file to upload."
    assert store.state.message.severity == ERROR


def test_upload_success_end_to_end(store, session, history_payload):
    _select(store, "listings.csv")
    session.post.return_value = make_response(200, {"uploadedCount": 42, "errors": []})
    session.get.return_value = make_response(200, history_payload)

    result = operations.submit_upload(store, session, interval=0.01)

    assert result.uploaded_count == 42
    state = store.state
    assert state.message.text == "Successfully uploaded 42 listings! "
    assert state.message.severity == SUCCESS
    assert "had errors" not in state.message.text
    assert state.selected_file is None
    assert state.preview is None
    assert state.uploading is False
    assert state.upload_progress == 0
    assert state.dialog is None
    assert [entry.original_name for entry in state.history] == ["plumbers.xlsx", "electricians.csv"]
    session.get.assert_called_once()


def test_upload_sends_file_as_multipart(store, session):
    _select(store, "listings.csv")
    session.post.return_value = make_response(200, {"uploadedCount": 1, "errors": []})
    session.get.return_value = make_response(200, [])

    operations.submit_upload(store, session, interval=0.01)

    args, kwargs = session.post.call_args
    assert args[0] == f"{config.API_BASE}{api_client.BULK_UPLOAD_PATH}"
    assert kwargs["files"] == {"file": ("listings.csv", b"COMPANY,EMAIL\nAcme,a@b.com\n", "text/csv")}


def test_upload_success_resets_file_widget(store, session):
    _select(store)
    key = store.state.file_input_key
    session.post.return_value = make_response(200, {"uploadedCount": 1, "errors": []})
    session.get.return_value = make_response(200, [])

    operations.submit_upload(store, session, interval=0.01)

    assert store.state.file_input_key == key + 1


def test_partial_success_reports_error_count_and_queues_report(store, session):
    _select(store)
    errors = [{"row": i, "sheet": "Plumbers" if i % 2 else None, "error": f"Missing EMAIL {i}"} for i in range(2, 9)]
    session.post.return_value = make_response(200, {"uploadedCount": 10, "errors": errors})
    session.get.return_value = make_response(200, [])

    operations.submit_upload(store, session, interval=0.01)

    state = store.state
    assert state.message.text == "Successfully uploaded 10 listings! 7 entries had errors."
    assert state.message.severity == SUCCESS
    assert state.selected_file is None
    session.get.assert_called_once()

    dialog = state.dialog
    assert dialog.title == "Upload completed with errors"
    assert dialog.body.startswith("Upload completed with errors:\n\n")
    assert "Row 2: Missing EMAIL 2" in dialog.body
    assert "Row 3 (Sheet: Plumbers): Missing EMAIL 3" in dialog.body
    assert "Row 6: Missing EMAIL 6" in dialog.body
    assert "Row 7" not in dialog.body
    assert "... and 2 more errors" in dialog.body
    assert len(dialog.row_errors) == 7


def test_server_error_keeps_selection_for_retry(store, session):
    _select(store)
    file = store.state.selected_file
    session.post.return_value = make_response(400, {"error": "Missing COMPANY column"})

    result = operations.submit_upload(store, session, interval=0.01)

    assert result is None
    state = store.state
    assert state.message.text == "Upload failed: Missing COMPANY column"
    assert state.message.severity == ERROR
    assert state.selected_file == file
    assert state.preview is not None
    assert state.uploading is False
    assert state.upload_progress == 0
    session.get.assert_not_called()


def test_server_error_without_json_body_uses_fallback(store, session):
    _select(store)
    session.post.return_value = make_response(502, ValueError("not json"))

    operations.submit_upload(store, session, interval=0.01)

    assert store.state.message.text == "Upload failed: Upload failed"


def test_network_error_is_reported(store, session):
    _select(store)
    session.post.side_effect = requests.exceptions.ConnectionError("connection refused")

    operations.submit_upload(store, session, interval=0.01)

    message = store.state.message
    assert message.severity == ERROR
    assert message.text.startswith("Upload failed: Unable to connect to backend service")
    assert store.state.selected_file is not None


def test_malformed_success_body_is_reported(store, session):
    _select(store)
    session.post.return_value = make_response(200, {"unexpected": True})

    operations.submit_upload(store, session, interval=0.01)

    assert store.state.message.text == "Upload failed: Unexpected response from backend"
    assert store.state.selected_file is not None


def test_progress_is_simulated_in_steps_of_ten(store, session):
    _select(store)

    def slow_post(*args, **kwargs):
        time.sleep(0.4)
        return make_response(200, {"uploadedCount": 3, "errors": []})

    session.post.side_effect = slow_post
    session.get.return_value = make_response(200, [])
    seen = []

    operations.submit_upload(store, session, on_progress=seen.append, interval=0.02)

    assert seen[0] == 0
    assert seen[-2:] == [100, 0]
    ticks = seen[1:-2]
    assert ticks[:9] == [10, 20, 30, 40, 50, 60, 70, 80, 90]
    assert all(value == 90 for value in ticks[9:])
    assert store.state.upload_progress == 0
    assert store.state.uploading is False


def test_progress_snaps_to_full_even_on_failure(store, session):
    _select(store)
    session.post.return_value = make_response(500, {"error": "boom"})
    seen = []

    operations.submit_upload(store, session, on_progress=seen.append, interval=0.01)

    assert seen[-2:] == [100, 0]


def test_submit_while_uploading_is_ignored(store, session):
    _select(store)
    store.dispatch(UploadStarted())
    before = store.state
    seen = []

    result = operations.submit_upload(store, session, on_progress=seen.append, interval=0.01)

    assert result is None
    session.post.assert_not_called()
    assert store.state == before
    assert seen == []
