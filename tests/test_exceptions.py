"""Unit tests for attributed_body.exceptions module."""

import pytest

from attributed_body.exceptions import (
    AttributedBodyException,
    ConfigurationException,
    IllegalStateException,
    InvalidArrayLiteralException,
    InvalidBackReferenceException,
    InvalidHeaderException,
    NoEndPatternException,
    NoStartPatternException,
    NumericConversionException,
    OutOfBoundsException,
    PlistParseException,
    RecursionLimitException,
    ResidualReservationException,
    StreamTypedException,
    StringDecodeException,
    TypedStreamException,
)


class TestAttributedBodyException:
    """Tests for AttributedBodyException base class."""

    def test_create_with_message(self):
        ex = AttributedBodyException("test message")
        assert str(ex) == "test message"
        assert ex.cause is None

    def test_create_with_message_and_cause(self):
        cause = ValueError("original error")
        ex = AttributedBodyException("wrapper message", cause=cause)
        assert str(ex) == "wrapper message"
        assert ex.cause is cause

    def test_create_empty(self):
        ex = AttributedBodyException()
        assert str(ex) == ""
        assert ex.cause is None


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            InvalidHeaderException,
            NumericConversionException,
            StringDecodeException,
            InvalidArrayLiteralException,
            RecursionLimitException,
        ],
    )
    def test_typedstream_errors(self, exception_class):
        ex = exception_class("bad archive")
        assert isinstance(ex, TypedStreamException)
        assert isinstance(ex, AttributedBodyException)

    @pytest.mark.parametrize(
        "exception_class", [NoStartPatternException, NoEndPatternException]
    )
    def test_streamtyped_errors(self, exception_class):
        ex = exception_class("bad stream")
        assert isinstance(ex, StreamTypedException)
        assert not isinstance(ex, TypedStreamException)

    @pytest.mark.parametrize(
        "exception_class",
        [ConfigurationException, IllegalStateException, PlistParseException],
    )
    def test_other_errors(self, exception_class):
        assert isinstance(exception_class("x"), AttributedBodyException)


class TestExceptionsWithFields:
    """Tests for exceptions that carry extra attributes."""

    def test_out_of_bounds(self):
        ex = OutOfBoundsException(12, 10)
        assert ex.index == 12
        assert ex.length == 10
        assert "12" in str(ex)
        assert isinstance(ex, TypedStreamException)

    def test_invalid_back_reference(self):
        ex = InvalidBackReferenceException(7, 3)
        assert ex.index == 7
        assert ex.length == 3
        assert isinstance(ex, TypedStreamException)

    def test_residual_reservation(self):
        ex = ResidualReservationException((0, 4))
        assert ex.slots == [0, 4]
        assert isinstance(ex, TypedStreamException)
