"""Request mapping: Message to messages-endpoint form fields and file parts."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import orjson
import pytest

from mailgun_v3.adapters.mailgun.payload import (
    MessagePayload,
    attachment_from_path,
    build_message_payload,
    format_delivery_time,
)
from mailgun_v3.domain.address import EmailAddress
from mailgun_v3.domain.enums import ClickTracking
from mailgun_v3.domain.message import Attachment, Message, MessageBody, SendOptions, Template

SENDER = EmailAddress.named("Ann Sender", "ann@example.com")
BOB = EmailAddress.address_only("bob@example.com")
CAROL = EmailAddress.named("Carol", "carol@example.com")


def _message(**overrides: object) -> Message:
    values: dict[str, object] = {"to": (BOB,), "subject": "Hello", "body": MessageBody(text="Hi Bob")}
    values.update(overrides)
    return Message(**values)  # type: ignore[arg-type]


# ======================== Core fields ========================


@pytest.mark.os_agnostic
def test_minimal_message_maps_to_from_to_subject_text() -> None:
    """A plain message produces exactly the four required fields."""
    payload = build_message_payload(SENDER, _message())

    assert payload.fields == {
        "from": ["Ann Sender <ann@example.com>"],
        "to": ["bob@example.com"],
        "subject": ["Hello"],
        "text": ["Hi Bob"],
    }
    assert payload.files == []


@pytest.mark.os_agnostic
def test_field_order_starts_with_from_then_recipients() -> None:
    """Insertion order follows the Mailgun documentation."""
    payload = build_message_payload(SENDER, _message(cc=(CAROL,), body=MessageBody(text="t", html="<p>h</p>")))

    assert list(payload.fields) == ["from", "to", "cc", "subject", "text", "html"]


@pytest.mark.os_agnostic
def test_every_recipient_becomes_its_own_value() -> None:
    """Multiple recipients repeat the field instead of joining with commas."""
    payload = build_message_payload(SENDER, _message(to=(BOB, CAROL), bcc=(BOB,)))

    assert payload.fields["to"] == ["bob@example.com", "Carol <carol@example.com>"]
    assert payload.fields["bcc"] == ["bob@example.com"]


@pytest.mark.os_agnostic
def test_html_only_body_omits_text() -> None:
    """Unset body parts are not sent."""
    payload = build_message_payload(SENDER, _message(body=MessageBody(html="<b>x</b>")))

    assert "text" not in payload.fields
    assert payload.first("html") == "<b>x</b>"


# ======================== Template ========================


@pytest.mark.os_agnostic
def test_template_fields_are_mapped() -> None:
    """Template name, version, text rendering and variables map to t: fields."""
    template = Template(name="welcome", version="v2", variables={"first": "Bob", "n": 3}, render_text=True)
    payload = build_message_payload(SENDER, _message(body=None, template=template))

    assert payload.first("template") == "welcome"
    assert payload.first("t:version") == "v2"
    assert payload.first("t:text") == "yes"
    assert orjson.loads(payload.fields["t:variables"][0]) == {"first": "Bob", "n": 3}


@pytest.mark.os_agnostic
def test_bare_template_sends_only_its_name() -> None:
    """Optional template parts stay absent."""
    payload = build_message_payload(SENDER, _message(body=None, template=Template(name="welcome")))

    assert payload.first("template") == "welcome"
    assert not {"t:version", "t:text", "t:variables"} & set(payload.fields)


# ======================== Options ========================


@pytest.mark.os_agnostic
def test_tags_repeat_the_o_tag_field() -> None:
    """Each tag is a separate o:tag value."""
    payload = build_message_payload(SENDER, _message(options=SendOptions(tags=("welcome", "beta"))))

    assert payload.fields["o:tag"] == ["welcome", "beta"]


@pytest.mark.os_agnostic
def test_boolean_options_map_to_yes_and_no() -> None:
    """Set flags are rendered as yes/no; unset flags are omitted."""
    options = SendOptions(test_mode=True, tracking=False, require_tls=True, dkim=False)
    payload = build_message_payload(SENDER, _message(options=options))

    assert payload.first("o:testmode") == "yes"
    assert payload.first("o:tracking") == "no"
    assert payload.first("o:require-tls") == "yes"
    assert payload.first("o:dkim") == "no"
    assert "o:tracking-opens" not in payload.fields
    assert "o:skip-verification" not in payload.fields


@pytest.mark.os_agnostic
def test_click_tracking_uses_the_mailgun_value() -> None:
    """htmlonly is passed through verbatim."""
    payload = build_message_payload(SENDER, _message(options=SendOptions(tracking_clicks=ClickTracking.HTML_ONLY)))

    assert payload.first("o:tracking-clicks") == "htmlonly"


@pytest.mark.os_agnostic
def test_delivery_time_is_rfc_2822() -> None:
    """o:deliverytime keeps the original UTC offset."""
    moment = datetime(2030, 5, 1, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    payload = build_message_payload(SENDER, _message(options=SendOptions(delivery_time=moment)))

    assert payload.first("o:deliverytime") == "Wed, 01 May 2030 09:30:00 +0200"


@pytest.mark.os_agnostic
def test_headers_and_reply_to_use_the_h_prefix() -> None:
    """Custom headers become h: fields; reply_to becomes h:Reply-To."""
    options = SendOptions(headers={"X-Campaign": "spring"}, reply_to=CAROL)
    payload = build_message_payload(SENDER, _message(options=options))

    assert payload.first("h:Reply-To") == "Carol <carol@example.com>"
    assert payload.first("h:X-Campaign") == "spring"


@pytest.mark.os_agnostic
def test_custom_variables_keep_strings_and_encode_the_rest() -> None:
    """v: strings go verbatim; other values are JSON."""
    options = SendOptions(variables={"user_id": "42", "meta": {"plan": "pro"}, "count": 7})
    payload = build_message_payload(SENDER, _message(options=options))

    assert payload.first("v:user_id") == "42"
    assert orjson.loads(payload.fields["v:meta"][0]) == {"plan": "pro"}
    assert payload.first("v:count") == "7"


@pytest.mark.os_agnostic
def test_recipient_variables_are_one_json_object() -> None:
    """Batch sending data is a single JSON document keyed by address."""
    options = SendOptions(recipient_variables={"bob@example.com": {"first": "Bob", "id": 1}})
    payload = build_message_payload(SENDER, _message(options=options))

    assert orjson.loads(payload.fields["recipient-variables"][0]) == {"bob@example.com": {"first": "Bob", "id": 1}}


# ======================== Files ========================


@pytest.mark.os_agnostic
def test_attachments_and_inline_parts_use_separate_field_names() -> None:
    """Inline parts go to 'inline', the rest to 'attachment'."""
    attachments = (
        Attachment(filename="report.pdf", content=b"%PDF", content_type="application/pdf"),
        Attachment(filename="logo.png", content=b"\x89PNG", content_type="image/png", inline=True),
        Attachment(filename="blob", content=b"\x00"),
    )
    payload = build_message_payload(SENDER, _message(attachments=attachments))

    assert payload.files == [
        ("attachment", ("report.pdf", b"%PDF", "application/pdf")),
        ("inline", ("logo.png", b"\x89PNG", "image/png")),
        ("attachment", ("blob", b"\x00", "application/octet-stream")),
    ]


@pytest.mark.os_agnostic
def test_attachment_from_path_reads_bytes_and_guesses_type(tmp_path: Path) -> None:
    """The file name drives the content type guess."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello")

    attachment = attachment_from_path(path)

    assert attachment.filename == "notes.txt"
    assert attachment.content == b"hello"
    assert attachment.content_type == "text/plain"
    assert attachment.inline is False


@pytest.mark.os_agnostic
def test_attachment_from_path_falls_back_to_octet_stream(tmp_path: Path) -> None:
    """Unknown extensions are sent as application/octet-stream."""
    path = tmp_path / "data.unknownext"
    path.write_bytes(b"\x01")

    assert attachment_from_path(path, inline=True).content_type == "application/octet-stream"


@pytest.mark.os_agnostic
def test_attachment_from_missing_path_raises(tmp_path: Path) -> None:
    """A missing file surfaces as FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        attachment_from_path(tmp_path / "missing.pdf")


# ======================== MessagePayload ========================


@pytest.mark.os_agnostic
def test_as_form_data_collapses_single_values() -> None:
    """Single values become strings; repeated fields stay lists."""
    payload = MessagePayload()
    payload.add("subject", "Hi")
    payload.add("to", "a@example.com")
    payload.add("to", "b@example.com")

    assert payload.as_form_data() == {"subject": "Hi", "to": ["a@example.com", "b@example.com"]}


@pytest.mark.os_agnostic
def test_format_delivery_time_for_utc() -> None:
    """UTC renders with a +0000 offset."""
    assert format_delivery_time(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)) == "Tue, 02 Jan 2024 03:04:05 +0000"
