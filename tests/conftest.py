"""
Shared fixtures: a recording stand-in for the Anthropic client, PDF
builders, and a TestClient wired to services that use them.
"""

import os
from types import SimpleNamespace

import httpx
import pymupdf
import pytest
from fastapi.testclient import TestClient

from course_eval_api.app import app, build_summary_service, set_services
from course_eval_api.config import Settings

VALID_KEY = "sk-ant-validkeyabcdefghij"

SAMPLE_SUMMARY = """## CONSTRUCTIVE FEEDBACK SUMMARY

**Most Frequent Suggestions:**
• Examples (mentioned 1 times): Students asked for more worked examples.

## POSITIVE COMMENTS

**Encouraging Feedback:**
"Great class!"

## OVERALL SENTIMENT
Positive overall, with a request for more examples."""


class _FakeClient:
    def __init__(self, provider, api_key):
        self.provider = provider
        self.api_key = api_key
        self.messages = self

    async def create(self, **kwargs):
        self.provider.calls.append(kwargs)
        if self.provider.error is not None:
            raise self.provider.error
        content = []
        if self.provider.text is not None:
            content.append(SimpleNamespace(type="text", text=self.provider.text))
        return SimpleNamespace(stop_reason=self.provider.stop_reason, content=content)

    async def close(self):
        self.provider.closed += 1


class FakeProvider:
    """Client factory standing in for AsyncAnthropic; records every call"""

    def __init__(self, text=SAMPLE_SUMMARY, stop_reason="end_turn", error=None):
        self.text = text
        self.stop_reason = stop_reason
        self.error = error
        self.calls = []
        self.keys = []
        self.closed = 0

    def __call__(self, api_key):
        self.keys.append(api_key)
        return _FakeClient(self, api_key)

    @property
    def last_prompt(self):
        return self.calls[-1]["messages"][0]["content"]


def provider_status_error(cls, status_code, message="error"):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request)
    return cls(message, response=response, body=None)


def make_pdf(*pages):
    """Build a PDF with one page per string"""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def test_settings(tmp_path):
    s = Settings()
    s.ANTHROPIC_API_KEY = None
    s.KEY_SOURCE = "request"
    s.SUBMISSION_MODE = "text"
    s.ENFORCE_SUMMARY_FORMAT = False
    s.MAX_UPLOAD_SIZE_MB = 4
    s.MAX_TEXT_CHARS = 50000
    s.ENVIRONMENT = "production"
    s.UPLOAD_DIR = str(tmp_path / "uploads")
    return s


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def service(test_settings, provider):
    return build_summary_service(test_settings, client_factory=provider)


@pytest.fixture
def client(service):
    set_services(service)
    yield TestClient(app)
    set_services(None)


@pytest.fixture
def upload_dir_files(test_settings):
    def _list():
        if not os.path.isdir(test_settings.UPLOAD_DIR):
            return []
        return os.listdir(test_settings.UPLOAD_DIR)
    return _list
