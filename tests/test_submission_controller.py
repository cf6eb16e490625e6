"""Tests for the client-side submission lifecycle"""

import asyncio
import json
import logging

import httpx
import pytest

from client.api import NetworkError, SubmissionApi
from client.controller import (
    NETWORK_ERROR_MESSAGE,
    SUBMITTING_LABEL,
    SubmissionController,
    SubmissionState,
)
from client.dom import FeedbackMessage, Form, FormControl, Option, SubmitControl


def build_form(submit_tag="button", wrapped=True, name="Asha Rao", phone="9876543210"):
    controls = [
        FormControl(name="fullname", value=name),
        FormControl(name="phone", value=phone),
        FormControl(name="city", value="Pune", classes={"input-error"}),
        FormControl(
            tag="select",
            name="course",
            options=[Option("Select course", ""), Option("MBA", "mba-1")],
            selected_index=1,
        ),
        FormControl(tag="textarea", name="message", value="Call me"),
    ]
    if submit_tag == "input":
        submit = SubmitControl(tag="input", value="Request Callback")
    else:
        submit = SubmitControl(tag="button", text="Request Callback")
    return Form(controls=controls, submit=submit, has_submit_wrapper=wrapped)


def make_controller(form, handler, **timings):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    timings.setdefault("success_visible", 0)
    timings.setdefault("success_fade", 0)
    timings.setdefault("error_visible", 0)
    return SubmissionController(form, SubmissionApi(http_client), **timings)


def ok_handler(requests_seen):
    def handler(request):
        requests_seen.append(json.loads(request.content))
        return httpx.Response(200, json={
            "success": True,
            "message": "Thank you!",
            "submissionId": 1,
            "emailSent": False,
        })
    return handler


class TestSubmissionController:
    @pytest.mark.asyncio
    async def test_success_clears_inputs_and_restores_label(self):
        seen = []
        form = build_form()
        controller = make_controller(form, ok_handler(seen), success_visible=10)

        state = await controller.submit()

        assert state == SubmissionState.SUCCESS
        assert seen == [{
            "fullName": "Asha Rao",
            "contactNumber": "9876543210",
            "city": "Pune",
            "interestedCourse": "MBA",
            "message": "Call me",
        }]
        assert [c.value for c in form.controls if c.tag != "select"] == ["", "", "", ""]
        assert form.controls[3].selected_index == 0
        assert "input-error" not in form.controls[2].classes
        assert form.submit.disabled is False
        assert form.submit.label == "Request Callback"
        assert form.loading is False
        assert form.message.text == "Thank you!"
        assert form.message.kind == "success"

    @pytest.mark.asyncio
    async def test_input_submit_label_restored(self):
        form = build_form(submit_tag="input")
        controller = make_controller(form, ok_handler([]))

        await controller.submit()

        assert form.submit.value == "Request Callback"

    @pytest.mark.asyncio
    async def test_missing_name_blocks_request(self):
        seen = []
        form = build_form(name="  ")
        controller = make_controller(form, ok_handler(seen), error_visible=10)

        state = await controller.submit()

        assert state == SubmissionState.ERROR
        assert seen == []
        assert form.message.text == "Please enter your full name"

    @pytest.mark.asyncio
    async def test_missing_phone_blocks_request(self):
        seen = []
        form = build_form(phone="")
        controller = make_controller(form, ok_handler(seen), error_visible=10)

        await controller.submit()

        assert seen == []
        assert form.message.text == "Please enter your contact number"

    @pytest.mark.asyncio
    async def test_server_rejection_keeps_inputs(self):
        def handler(request):
            return httpx.Response(400, json={"success": False, "message": "Please enter a valid 10-digit contact number"})

        form = build_form(phone="12345")
        controller = make_controller(form, handler, error_visible=10)

        state = await controller.submit()

        assert state == SubmissionState.ERROR
        assert form.message.text == "Please enter a valid 10-digit contact number"
        assert form.controls[1].value == "12345"
        assert form.submit.disabled is False
        assert form.submit.label == "Request Callback"

    @pytest.mark.asyncio
    async def test_network_failure_runs_cleanup(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        form = build_form()
        controller = make_controller(form, handler, error_visible=10)

        state = await controller.submit()

        assert state == SubmissionState.ERROR
        assert form.message.text == NETWORK_ERROR_MESSAGE
        assert form.submit.disabled is False
        assert form.submit.label == "Request Callback"
        assert controller.in_flight is False

    @pytest.mark.asyncio
    async def test_unexpected_transport_error_shows_network_message(self):
        def handler(request):
            raise RuntimeError("transport bug")

        form = build_form()
        controller = make_controller(form, handler, error_visible=10)

        state = await controller.submit()

        assert state == SubmissionState.ERROR
        assert form.message.text == NETWORK_ERROR_MESSAGE
        assert form.submit.disabled is False
        assert form.submit.label == "Request Callback"
        assert controller.in_flight is False

    @pytest.mark.asyncio
    async def test_unparseable_body_runs_cleanup(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        form = build_form()
        controller = make_controller(form, handler, error_visible=10)

        await controller.submit()

        assert form.message.text == NETWORK_ERROR_MESSAGE
        assert form.submit.label == "Request Callback"

    @pytest.mark.asyncio
    async def test_submit_control_disabled_while_in_flight(self):
        release = asyncio.Event()
        observed = {}
        form = build_form()

        async def handler(request):
            observed["label"] = form.submit.label
            observed["disabled"] = form.submit.disabled
            observed["loading"] = form.loading
            await release.wait()
            return httpx.Response(200, json={"success": True, "message": "Thank you!"})

        controller = make_controller(form, handler)
        first = asyncio.ensure_future(controller.submit())
        await asyncio.sleep(0.01)

        assert controller.state == SubmissionState.SUBMITTING
        assert observed == {"label": SUBMITTING_LABEL, "disabled": True, "loading": True}

        # a second submit while in flight is ignored
        assert await controller.submit() == SubmissionState.SUBMITTING

        release.set()
        assert await first == SubmissionState.SUCCESS

    @pytest.mark.asyncio
    async def test_reentrant_submit_sends_single_request(self):
        release = asyncio.Event()
        calls = []

        async def handler(request):
            calls.append(request)
            await release.wait()
            return httpx.Response(200, json={"success": True, "message": "Thank you!"})

        controller = make_controller(build_form(), handler)
        first = asyncio.ensure_future(controller.submit())
        second = asyncio.ensure_future(controller.submit())
        await asyncio.sleep(0.01)
        release.set()
        await asyncio.gather(first, second)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_success_message_fades_then_returns_to_idle(self):
        form = build_form()
        controller = make_controller(form, ok_handler([]), success_visible=0.01, success_fade=0.01)

        await controller.submit()
        message = form.message
        await controller.wait_until_idle()

        assert message.opacity == 0.0
        assert form.message is None
        assert controller.state == SubmissionState.IDLE

    @pytest.mark.asyncio
    async def test_error_message_removed_without_fade(self):
        form = build_form(name="")
        controller = make_controller(form, ok_handler([]), error_visible=0.01)

        await controller.submit()
        message = form.message
        await controller.wait_until_idle()

        assert message.opacity == 1.0
        assert form.message is None
        assert controller.state == SubmissionState.IDLE


class TestFeedbackPlacement:
    def test_inserted_after_wrapped_submit_control(self):
        form = build_form(wrapped=True)
        form.children.append(FormControl(name="consent", type="checkbox"))

        form.insert_message(FeedbackMessage("Thank you!", "success"))

        index = form.children.index(form.submit)
        assert form.children[index + 1].text == "Thank you!"

    def test_appended_without_wrapper(self):
        form = build_form(wrapped=False)
        form.children.append(FormControl(name="consent", type="checkbox"))

        form.insert_message(FeedbackMessage("Oops", "error"))

        assert form.children[-1].text == "Oops"

    def test_only_one_message_at_a_time(self):
        form = build_form()

        form.insert_message(FeedbackMessage("first", "error"))
        form.insert_message(FeedbackMessage("second", "success"))

        messages = [c for c in form.children if isinstance(c, FeedbackMessage)]
        assert [m.text for m in messages] == ["second"]


class TestSubmissionApi:
    @pytest.mark.asyncio
    async def test_unreadable_response_is_logged_with_status(self, caplog):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
        api = SubmissionApi(http_client)

        with caplog.at_level(logging.ERROR, logger="client.api"), pytest.raises(NetworkError):
            await api.submit({"fullName": "Asha Rao", "contactNumber": "9876543210"})

        record = caplog.records[-1]
        assert record.args == (502, "/api/submit-form")
        assert record.getMessage() == "Unreadable response (502) from /api/submit-form"
