import logging
from unittest.mock import MagicMock

import pytest

from commandus import BusBuilder, handler
from commandus.bus.command import Command
from commandus.middleware import LoggingMiddleware, ValidatorMiddleware
from commandus.ports.middleware import IMiddleware
from commandus.ports.validation import IValidator
from commandus.primitives.exceptions import ValidationError
from commandus.validation import ValidationResult

# --- Test Models ---


class MyCommand(Command[str]):
    data: str


class MyCommandHandler:
    @handler
    def handle(self, command: MyCommand) -> str:
        return command.data.upper()


# --- LoggingMiddleware Tests ---


def test_logging_middleware_logs_execution(caplog) -> None:
    caplog.set_level(logging.INFO, logger="commandus.middleware")
    middleware = LoggingMiddleware()
    command = MyCommand(data="test")
    next_fn = MagicMock(return_value="ok")

    result = middleware(command, next_fn)

    assert result == "ok"
    next_fn.assert_called_once_with(command)
    assert "Handling MyCommand" in caplog.text
    assert "MyCommand completed in" in caplog.text


def test_logging_middleware_logs_exception(caplog) -> None:
    caplog.set_level(logging.INFO, logger="commandus.middleware")
    middleware = LoggingMiddleware()
    next_fn = MagicMock(side_effect=ValueError("boom"))

    with pytest.raises(ValueError, match="boom"):
        middleware(MyCommand(data="test"), next_fn)

    assert "Handling MyCommand" in caplog.text
    assert "MyCommand failed after" in caplog.text
    failure = [r for r in caplog.records if "failed after" in r.getMessage()]
    assert failure[0].levelno == logging.ERROR
    assert failure[0].exc_info is not None


def test_logging_middleware_uses_given_logger_and_level(caplog) -> None:
    custom = logging.getLogger("tests.custom")
    caplog.set_level(logging.DEBUG, logger="tests.custom")
    middleware = LoggingMiddleware(logger=custom, level=logging.DEBUG)

    middleware(MyCommand(data="x"), MagicMock(return_value=None))

    assert {r.name for r in caplog.records} == {"tests.custom"}
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_logging_middleware_reports_correlation_id(caplog) -> None:
    caplog.set_level(logging.INFO, logger="commandus.middleware")

    LoggingMiddleware()(
        MyCommand(data="x", correlation_id="cid-1"), MagicMock(return_value=None)
    )

    assert "correlation_id=cid-1" in caplog.text


def test_logging_middleware_on_a_bus(caplog) -> None:
    caplog.set_level(logging.INFO, logger="commandus.middleware")
    bus = (
        BusBuilder()
        .register_command_handler(MyCommandHandler())
        .register_middleware(LoggingMiddleware())
        .build()
    )

    assert bus.execute(MyCommand(data="hi")) == "HI"
    assert "MyCommand completed in" in caplog.text


# --- ValidatorMiddleware Tests ---


def test_validator_middleware_success() -> None:
    validator = MagicMock(spec=IValidator)
    validator.validate.return_value = ValidationResult.success()
    middleware = ValidatorMiddleware(validator)
    command = MyCommand(data="valid")
    next_fn = MagicMock(return_value="ok")

    result = middleware(command, next_fn)

    assert result == "ok"
    validator.validate.assert_called_once_with(command)
    next_fn.assert_called_once_with(command)


def test_validator_middleware_failure() -> None:
    validator = MagicMock(spec=IValidator)
    validator.validate.return_value = ValidationResult.failure(
        {"data": ["Invalid"]}
    )
    middleware = ValidatorMiddleware(validator)
    next_fn = MagicMock()

    with pytest.raises(ValidationError) as exc_info:
        middleware(MyCommand(data="invalid"), next_fn)

    assert exc_info.value.errors == {"data": ["Invalid"]}
    next_fn.assert_not_called()


def test_bundled_middleware_satisfies_protocol() -> None:
    validator = MagicMock(spec=IValidator)

    assert isinstance(LoggingMiddleware(), IMiddleware)
    assert isinstance(ValidatorMiddleware(validator), IMiddleware)
