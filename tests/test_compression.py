"""
Tests for encode options, compression transforms and the serializer.
"""

from __future__ import annotations

import dataclasses
import logging

import pytest

from custom_id.compression import compile_options, compress_fields, skip_falsy, true_to_one
from custom_id.errors import CustomIdError, LengthLimitError
from custom_id.options import (
    EncodeOptions,
    get_default_encode_options,
    reset_default_encode_options,
    set_default_encode_options,
)
from custom_id.serializer import MAX_LENGTH, compose, serialize


@pytest.fixture(autouse=True)
def _restore_defaults():
    yield
    reset_default_encode_options()


# ---------------------------------------------------------------------------
# TestEncodeOptions
# ---------------------------------------------------------------------------

class TestEncodeOptions:

    def test_defaults(self):
        opts = EncodeOptions()
        assert opts.skip_falsy_values is True
        assert opts.convert_true_to_one is False

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            EncodeOptions().skip_falsy_values = False  # type: ignore[misc]

    def test_replace(self):
        opts = EncodeOptions().replace(convert_true_to_one=True)
        assert opts == EncodeOptions(skip_falsy_values=True, convert_true_to_one=True)

    def test_is_lossless(self):
        assert EncodeOptions(False, False).is_lossless
        assert not EncodeOptions().is_lossless

    def test_set_default_returns_previous(self):
        new = EncodeOptions(skip_falsy_values=False)
        previous = set_default_encode_options(new)
        assert previous == EncodeOptions()
        assert get_default_encode_options() is new

    def test_set_default_rejects_other_types(self):
        with pytest.raises(TypeError):
            set_default_encode_options({"skip_falsy_values": False})  # type: ignore[arg-type]

    def test_reset_default(self):
        set_default_encode_options(EncodeOptions(convert_true_to_one=True))
        reset_default_encode_options()
        assert get_default_encode_options() == EncodeOptions()


# ---------------------------------------------------------------------------
# TestTransforms
# ---------------------------------------------------------------------------

class TestTransforms:

    def test_skip_falsy(self):
        assert skip_falsy(("a", "")) is None
        assert skip_falsy(("a", "x")) == ("a", "x")

    def test_true_to_one(self):
        assert true_to_one(("a", True)) == ("a", "1")
        assert true_to_one(("a", "true")) == ("a", "1")

    @pytest.mark.parametrize("value", [1, 1.0, "1", "True", False, ["true"]])
    def test_true_to_one_leaves_others(self, value):
        assert true_to_one(("a", value)) == ("a", value)

    def test_compile_options(self):
        assert compile_options(EncodeOptions()) == [skip_falsy]
        assert compile_options(EncodeOptions(True, True)) == [skip_falsy, true_to_one]
        assert compile_options(EncodeOptions(False, False)) == []

    def test_compress_lossless_is_identity(self):
        fields = {"a": "", "b": True}
        assert compress_fields(fields, EncodeOptions(False, False)) is fields

    def test_compress_does_not_mutate(self):
        fields = {"a": "", "b": True, "c": "x"}
        out = compress_fields(fields, EncodeOptions(True, True))
        assert out == {"b": "1", "c": "x"}
        assert fields == {"a": "", "b": True, "c": "x"}


# ---------------------------------------------------------------------------
# TestSerialize
# ---------------------------------------------------------------------------

class TestSerialize:

    def test_compose(self):
        assert compose("p", "") == "p"
        assert compose("p", "a=1") == "p?a=1"

    def test_falsy_fields_give_bare_prefix(self):
        assert serialize("rawId", {"a": False, "b": 0, "c": "", "d": []}) == "rawId"

    def test_true_to_one_block(self):
        opts = EncodeOptions(convert_true_to_one=True)
        assert serialize("p", {"a": True, "b": "true"}, opts) == "p?a=1&b=1"

    def test_uses_process_default(self):
        set_default_encode_options(EncodeOptions(skip_falsy_values=False))
        assert serialize("p", {"a": ""}) == "p?a="

    def test_explicit_options_beat_default(self):
        set_default_encode_options(EncodeOptions(skip_falsy_values=False))
        assert serialize("p", {"a": ""}, EncodeOptions()) == "p"

    def test_prefix_alone_can_exceed_limit(self):
        with pytest.raises(LengthLimitError):
            serialize("x" * (MAX_LENGTH + 1), {})

    def test_limit_error_is_package_error(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="custom_id.serializer"):
            with pytest.raises(CustomIdError) as exc:
                serialize("p", {"a": "b" * 200})
        assert isinstance(exc.value, LengthLimitError)
        assert exc.value.value == "p?a=" + "b" * 200
        assert "over 100 characters" in caplog.text

    def test_limit_error_is_not_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            with pytest.raises(LengthLimitError):
                serialize("p", {"a": "b" * 200})
        assert caplog.records == []
