"""Tests for protocol request and response models."""

import pytest

from pipeline_status.errors import ConfigurationError
from pipeline_status.protocol.models import (
    CheckRequest, InRequest, OutRequest, Version, VersionResponse
)
from pipeline_status.state.models import StatusAction


class TestVersion:
    """Test version cursors."""

    @pytest.mark.parametrize("raw,expected", [
        (None, ""),
        ({}, ""),
        ({"number": "12"}, "12"),
        ({"number": 12}, "12"),
        ({"number": None}, ""),
    ])
    def test_from_dict(self, raw, expected):
        assert Version.from_dict(raw).number == expected

    def test_rejects_non_object(self):
        with pytest.raises(ConfigurationError):
            Version.from_dict("12")


class TestVersionResponse:
    """Test in/out responses."""

    def test_for_build(self):
        """Test the build number is reported as version and metadata."""
        assert VersionResponse.for_build("7").to_dict() == {
            "version": {"number": "7"},
            "metadata": [{"name": "number", "value": "7"}],
        }


class TestRequests:
    """Test request decoding."""

    def test_check_request(self):
        request = CheckRequest.from_dict({
            "source": {"bucket": "b", "key": "k", "initial_version": 5},
            "version": {"number": "4"},
        })

        assert request.source.bucket == "b"
        assert request.source.initial_version == "5"
        assert request.version.number == "4"

    def test_check_request_without_version(self):
        """Test the first check carries a null version."""
        request = CheckRequest.from_dict({"source": {"bucket": "b", "key": "k"}, "version": None})

        assert request.version.number == ""

    def test_in_request(self):
        request = InRequest.from_dict({
            "source": {"bucket": "b", "key": "k"},
            "version": {"number": "3"},
            "params": {},
        })

        assert request.version.number == "3"
        assert request.params == {}

    @pytest.mark.parametrize("action", ["start", "finish", "fail"])
    def test_out_request(self, action):
        request = OutRequest.from_dict({
            "source": {"bucket": "b", "key": "k"},
            "params": {"action": action},
        })

        assert request.action == StatusAction(action)

    @pytest.mark.parametrize("params", [None, {}, {"action": "pause"}, {"action": "START"}])
    def test_out_request_rejects_unknown_action(self, params):
        with pytest.raises(ConfigurationError):
            OutRequest.from_dict({"source": {"bucket": "b", "key": "k"}, "params": params})

    def test_rejects_non_object_request(self):
        with pytest.raises(ConfigurationError):
            CheckRequest.from_dict(["source"])
