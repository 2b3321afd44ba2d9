import pytest

from errors import GenerationError, ValidationError
from fakes import FakeService, make_asset
from gemini_service import EditResult
from studio import (
    EMPTY_MESSAGE, MISSING_IMAGE_MESSAGE, ChatMessage, ProductSession, SessionStore,
)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def studio(service):
    s = ProductSession(service)
    s.upload_main_image(make_asset(b"X"))
    return s


def test_new_session_defaults(service):
    s = ProductSession(service)

    assert s.active_panel == "chat"
    assert s.busy == {"description": False, "sketch": False, "chat": False}
    assert s.main_image is None and s.transcript == [] and s.error is None


def test_upload_clears_previous_results(studio, service):
    service.edit_result = EditResult(make_asset(b"Y"), "Done")
    studio.generate_description()
    studio.generate_sketch()
    studio.send_message("make it red")
    assert studio.description and studio.sketch and studio.transcript

    studio.upload_main_image(make_asset(b"Z"))

    assert studio.description == ""
    assert studio.sketch is None
    assert studio.transcript == []
    assert studio.main_image == make_asset(b"Z")


@pytest.mark.parametrize("action", [
    lambda s: s.generate_description(),
    lambda s: s.generate_sketch(),
    lambda s: s.send_message("make it red"),
])
def test_no_request_without_main_image(service, action):
    s = ProductSession(service)

    with pytest.raises(ValidationError, match=MISSING_IMAGE_MESSAGE):
        action(s)

    assert service.calls == []
    assert s.error == MISSING_IMAGE_MESSAGE
    assert s.transcript == []


def test_description_replaces_previous_result(studio, service):
    service.description = "A blue ceramic mug"
    studio.generate_description()
    service.description = "A tall blue ceramic mug"
    studio.generate_description()

    assert studio.description == "A tall blue ceramic mug"
    assert studio.busy["description"] is False


def test_busy_flag_set_only_while_request_runs(studio, service):
    seen = []
    service.on_call = lambda name: seen.append(dict(studio.busy))

    studio.generate_sketch()

    assert seen == [{"description": False, "sketch": True, "chat": False}]
    assert studio.busy["sketch"] is False
    assert studio.sketch == service.sketch


def test_failed_description_sets_banner_and_clears_busy(studio, service):
    service.error = GenerationError("Failed to generate product description.")

    with pytest.raises(GenerationError):
        studio.generate_description()

    assert studio.error == "Failed to generate product description."
    assert studio.busy["description"] is False
    assert studio.description == ""


def test_new_request_clears_old_banner(studio, service):
    service.error = GenerationError("Failed to generate product sketch.")
    with pytest.raises(GenerationError):
        studio.generate_sketch()

    service.error = None
    studio.generate_sketch()

    assert studio.error is None


def test_send_message_appends_user_entry_before_request(studio, service):
    transcript_during_call = []
    service.on_call = lambda name: transcript_during_call.extend(studio.transcript)
    service.edit_result = EditResult(make_asset(b"Y"), "Done")

    studio.send_message("make it red")

    assert transcript_during_call == [ChatMessage("user", "make it red", ())]
    assert studio.main_image == make_asset(b"Y")
    assert studio.transcript[-1] == ChatMessage("assistant", "Done", (make_asset(b"Y").data_url,))
    assert studio.busy["chat"] is False


def test_send_message_passes_and_clears_attachments(studio, service):
    ref = make_asset(b"ref", "image/jpeg")
    studio.add_attachment(ref)
    service.edit_result = EditResult(make_asset(b"Y"), "Done")

    studio.send_message("")

    name, (main, aux, prompt) = service.calls[0]
    assert name == "edit_image"
    assert main == make_asset(b"X")
    assert aux == [ref]
    assert prompt == ""
    assert studio.attachments == []
    assert studio.transcript[0] == ChatMessage("user", "", (ref.data_url,))


def test_send_message_needs_prompt_or_attachment(studio, service):
    with pytest.raises(ValidationError, match=EMPTY_MESSAGE):
        studio.send_message("   ")

    assert service.calls == []
    assert studio.transcript == []


def test_failed_edit_keeps_image_and_adds_one_error_entry(studio, service):
    service.error = GenerationError("Failed to edit the product image.")

    with pytest.raises(GenerationError):
        studio.send_message("make it red")

    assert studio.main_image == make_asset(b"X")
    assert len(studio.transcript) == 2
    reply = studio.transcript[1]
    assert reply.origin == "assistant"
    assert "Failed to edit the product image." in reply.text
    assert reply.images == ()
    assert studio.error == "Failed to edit the product image."
    assert studio.busy["chat"] is False


def test_result_for_replaced_image_is_dropped(studio, service):
    service.on_call = lambda name: studio.upload_main_image(make_asset(b"NEW"))
    service.edit_result = EditResult(make_asset(b"Y"), "Done")

    studio.send_message("make it red")

    assert studio.main_image == make_asset(b"NEW")
    assert studio.transcript == []
    assert studio.busy["chat"] is False


@pytest.mark.parametrize("action, error", [
    (lambda s: s.send_message("make it red"), "Failed to edit the product image."),
    (lambda s: s.generate_description(), "Failed to generate product description."),
    (lambda s: s.generate_sketch(), "Failed to generate product sketch."),
])
def test_failure_for_replaced_image_is_dropped(studio, service, action, error):
    service.on_call = lambda name: studio.upload_main_image(make_asset(b"NEW"))
    service.error = GenerationError(error)

    action(studio)

    assert studio.main_image == make_asset(b"NEW")
    assert studio.error is None
    assert studio.transcript == []
    assert not any(studio.busy.values())


@pytest.mark.parametrize("action", [
    lambda s: s.generate_description(),
    lambda s: s.generate_sketch(),
])
def test_panel_result_for_replaced_image_is_dropped(studio, service, action):
    service.on_call = lambda name: studio.upload_main_image(make_asset(b"NEW"))

    action(studio)

    assert studio.description == ""
    assert studio.sketch is None
    assert not any(studio.busy.values())


def test_description_runs_while_chat_edit_in_flight(studio, service):
    busy_after_nested = []

    def during_edit(name):
        if name == "edit_image":
            studio.generate_description()
            busy_after_nested.append(dict(studio.busy))

    service.on_call = during_edit
    service.description = "A blue ceramic mug"
    service.edit_result = EditResult(make_asset(b"Y"), "Done")

    studio.send_message("make it red")

    assert busy_after_nested == [{"description": False, "sketch": False, "chat": True}]
    assert [name for name, _ in service.calls] == ["edit_image", "generate_description"]
    assert studio.description == "A blue ceramic mug"
    assert studio.main_image == make_asset(b"Y")
    assert not any(studio.busy.values())


def test_panels_switch_freely_without_losing_content(studio):
    studio.generate_description()

    for panel in ("sketch", "chat", "description", "chat"):
        studio.switch_panel(panel)
        assert studio.active_panel == panel
    assert studio.description == "A product"

    with pytest.raises(ValidationError):
        studio.switch_panel("settings")


def test_to_dict_is_json_ready(studio, service):
    service.edit_result = EditResult(make_asset(b"Y"), "Done")
    studio.send_message("make it red")

    state = studio.to_dict()

    assert state["main_image"] == make_asset(b"Y").data_url
    assert state["transcript"] == [
        {"origin": "user", "text": "make it red", "images": []},
        {"origin": "assistant", "text": "Done", "images": [make_asset(b"Y").data_url]},
    ]
    assert state["sketch"] is None
    assert state["active_panel"] == "chat"


def test_store_evicts_oldest_session(service):
    store = SessionStore(service, max_sessions=2)
    first = store.create()
    second = store.create()
    third = store.create()

    assert store.get(first) is None
    assert store.get(second) is not None
    assert store.get(third).service is service
    assert len(store) == 2
    assert store.get(None) is None
