"""
CarValue Backend — Middleware Unit Tests
==========================================
"""

import logging

import pytest

from carvalue.middleware.logging import _level_for_status
from carvalue.middleware.request_id import MAX_CLIENT_ID_LENGTH, resolve_request_id


class TestResolveRequestId:

    def test_reuses_client_id(self):
        assert resolve_request_id("abc12345") == "abc12345"

    @pytest.mark.parametrize(
        "header_value",
        [None, "", "x" * (MAX_CLIENT_ID_LENGTH + 1), "bad\nid"],
    )
    def test_replaces_unusable_ids(self, header_value):
        rid = resolve_request_id(header_value)

        assert rid != header_value
        assert len(rid) == 8


class TestAccessLogLevel:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (302, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_follows_status(self, status, level):
        assert _level_for_status(status) == level
