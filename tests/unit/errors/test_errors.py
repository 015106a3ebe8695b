import pytest

from magicbus.errors.errors import (
    DEFAULT_FATAL_ERRORS,
    BusError,
    InvalidArgumentError,
    MailboxError,
    MailboxPanic,
    NotSubscribedError,
    is_recoverable,
)


class Order:
    pass


@pytest.mark.parametrize(
    "exc",
    [MailboxError("x"), ValueError("x"), OSError("x"), KeyError("x"), RuntimeError("x")],
)
def test_recoverable_errors(exc):
    assert is_recoverable(exc)


@pytest.mark.parametrize(
    "exc",
    [
        AssertionError(),
        TypeError(),
        AttributeError(),
        NameError(),
        NotImplementedError(),
        MailboxPanic(),
        KeyboardInterrupt(),
        SystemExit(),
    ],
)
def test_non_recoverable_errors(exc):
    assert not is_recoverable(exc)


def test_subclass_of_fatal_error_is_fatal():
    assert not is_recoverable(UnboundLocalError())  # a NameError


def test_custom_fatal_set():
    assert is_recoverable(AssertionError(), fatal=())
    assert not is_recoverable(KeyError("k"), fatal=(LookupError,))
    # panics stay fatal whatever the config says
    assert not is_recoverable(MailboxPanic(), fatal=())


def test_default_fatal_errors_are_exceptions():
    assert all(issubclass(e, Exception) for e in DEFAULT_FATAL_ERRORS)


def test_invalid_argument_error_is_value_error():
    exc = InvalidArgumentError("mailbox")
    assert isinstance(exc, BusError)
    assert isinstance(exc, ValueError)
    assert exc.argument == "mailbox"
    assert str(exc) == "'mailbox' must not be None"


def test_not_subscribed_error_messages():
    no_type = NotSubscribedError(Order)
    no_mailbox = NotSubscribedError(Order, "h1")

    assert isinstance(no_type, LookupError)
    assert isinstance(no_type, BusError)
    assert str(no_type) == "No subscriptions for type Order"
    assert str(no_mailbox) == "Mailbox 'h1' is not subscribed to Order"
