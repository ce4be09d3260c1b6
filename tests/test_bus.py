import dataclasses
import inspect
import logging

import pytest

from commandus import (
    Bus,
    BusBuilder,
    ConfigurationError,
    DispatchInvocationError,
    DuplicateHandlerError,
    DuplicateProviderError,
    HandlerDescriptor,
    HandlerNotFoundError,
    ICommandBus,
    ProviderNotFoundError,
    TypeNamePair,
    handler,
    provider,
)
from commandus.utils import qualified_name


# --- Commands ---


class Ping:
    pass


class Pong:
    pass


class SpecialPing(Ping):
    pass


class Upgrade:
    pass


# --- Handlers ---


class PingHandler:
    @handler
    def handle(self, command: Ping) -> int:
        return 5


class PingPongHandler:
    @handler
    def ping(self, command: Ping) -> int:
        return 5

    @handler
    def pong(self, command: Pong) -> int:
        return 6


class TwoPingHandlers:
    @handler
    def first(self, command: Ping) -> int:
        return 5

    @handler
    def second(self, command: Ping) -> int:
        return 6


class AnotherPingHandler:
    @handler
    def handle(self, command: Ping) -> int:
        return 6


class LimitHandler:
    @handler
    def handle(self, command: Ping, limit: int) -> int:
        return limit


class NamedLimitHandler:
    @handler
    def handle(self, command: Ping, b: int) -> int:
        return b


class IJHandler:
    @handler
    def handle(self, command: Ping, i: int, j: int) -> int:
        return i * j + 1


class TwoParamHandler:
    @handler
    def handle(self, command: Ping, count: int, label: str) -> int:
        return count + len(label)


class UpgradeHandler:
    @handler
    def handle(self, command: Upgrade) -> str:
        return "upgraded"


class FailingHandler:
    @handler
    def handle(self, command: Ping) -> int:
        raise ValueError("handler failed")


class Rebindable:
    """Callable whose signature follows whatever *target* currently is."""

    def __init__(self, target) -> None:
        self.target = target

    @property
    def __signature__(self) -> inspect.Signature:
        return inspect.signature(self.target)

    def __call__(self, *args):
        return self.target(*args)


class ExplicitRebindable:
    def __init__(self, method: Rebindable) -> None:
        self.method = method

    def command_handlers(self) -> list[HandlerDescriptor]:
        return [HandlerDescriptor(self, self.method, Ping)]


# --- Providers ---


class Limits:
    @provider
    def limit(self) -> int:
        return 6


class AB:
    @provider(name="a")
    def a(self) -> int:
        return 1

    @provider(name="b")
    def b(self) -> int:
        return 2


class IJ:
    @provider(name="i")
    def i(self) -> int:
        return 2

    @provider(name="j")
    def j(self) -> int:
        return 3


class CountAndLabel:
    @provider
    def count(self) -> int:
        return 4

    @provider
    def label(self) -> str:
        return "four"


class Labels:
    @provider
    def label(self) -> str:
        return "label"


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    @provider
    def next_value(self) -> int:
        self.calls += 1
        return self.calls


class FailingLimits:
    @provider
    def limit(self) -> int:
        raise ValueError("provider failed")


class DefaultNamedInts:
    @provider
    def first(self) -> int:
        return 1

    @provider
    def second(self) -> int:
        return 2


# --- Middleware ---


class Printer:
    def __init__(self, before: str, after: str) -> None:
        self.before = before
        self.after = after

    def __call__(self, message, next_handler):
        print(self.before, end="")
        result = next_handler(message)
        print(self.after, end="")
        return result


class Appender:
    def __init__(self, name: str, calls: list[str]) -> None:
        self.name = name
        self.calls = calls

    def __call__(self, message, next_handler):
        self.calls.append(self.name)
        return next_handler(message)


def short_circuit(message, next_handler):
    return "short-circuited"


def upgrade(message, next_handler):
    return next_handler(Upgrade())


# --- Dispatch ---


def test_single_handler() -> None:
    bus = BusBuilder().register_command_handler(PingHandler()).build()

    assert bus.execute(Ping()) == 5


def test_one_object_with_two_handlers() -> None:
    bus = BusBuilder().register_command_handler(PingPongHandler()).build()

    assert bus.execute(Ping()) == 5
    assert bus.execute(Pong()) == 6


def test_provided_value_single_provider_of_type() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(LimitHandler())
        .register_value_provider(Limits())
        .build()
    )

    assert bus.execute(Ping()) == 6


def test_provided_value_selected_by_parameter_name() -> None:
    bus = (
        BusBuilder()
        .register_value_provider(AB())
        .register_command_handler(NamedLimitHandler())
        .build()
    )

    assert bus.execute(Ping()) == 2


def test_several_providers_of_one_type_by_name() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(IJHandler())
        .register_value_provider(IJ())
        .build()
    )

    assert bus.execute(Ping()) == 7


def test_providers_of_different_types() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(TwoParamHandler())
        .register_value_provider(CountAndLabel())
        .build()
    )

    assert bus.execute(Ping()) == 8


def test_providers_are_invoked_on_every_dispatch() -> None:
    counter = Counter()
    bus = (
        BusBuilder()
        .register_command_handler(LimitHandler())
        .register_value_provider(counter)
        .build()
    )

    assert [bus.execute(Ping()) for _ in range(3)] == [1, 2, 3]
    assert counter.calls == 3


def test_dispatch_uses_exact_runtime_type() -> None:
    bus = BusBuilder().register_command_handler(PingHandler()).build()

    with pytest.raises(HandlerNotFoundError):
        bus.execute(SpecialPing())


def test_handler_errors_propagate_unchanged() -> None:
    bus = BusBuilder().register_command_handler(FailingHandler()).build()

    with pytest.raises(ValueError, match="handler failed"):
        bus.execute(Ping())


def test_provider_errors_propagate_unchanged() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(LimitHandler())
        .register_value_provider(FailingLimits())
        .build()
    )

    with pytest.raises(ValueError, match="provider failed"):
        bus.execute(Ping())


def test_uninvokable_handler_is_wrapped_with_its_cause() -> None:
    rebindable = Rebindable(lambda command: "ok")
    bus = (
        BusBuilder()
        .register_command_handler(ExplicitRebindable(rebindable))
        .build()
    )
    rebindable.target = lambda: "ok"

    with pytest.raises(DispatchInvocationError, match="Failed to invoke") as exc:
        bus.execute(Ping())

    assert isinstance(exc.value.cause, TypeError)
    assert exc.value.__cause__ is exc.value.cause


# --- Middleware ---


def test_middleware_wraps_in_registration_order(capsys) -> None:
    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_middleware(Printer("1", "2"))
        .register_middleware(Printer("3", "4"))
        .build()
    )

    assert bus.execute(Ping()) == 5
    assert capsys.readouterr().out == "1342"


def test_middleware_runs_in_order_on_each_call() -> None:
    calls: list[str] = []
    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_middleware(Appender("A", calls))
        .register_middleware(Appender("B", calls))
        .register_middleware(Appender("C", calls))
        .build()
    )

    bus.execute(Ping())
    bus.execute(Ping())

    assert calls == ["A", "B", "C", "A", "B", "C"]
    assert [m.name for m in bus.middlewares] == ["A", "B", "C"]


def test_middleware_can_short_circuit() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_middleware(short_circuit)
        .build()
    )

    assert bus.execute(Ping()) == "short-circuited"


def test_unknown_command_fails_before_middleware() -> None:
    calls: list[str] = []
    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_middleware(Appender("A", calls))
        .register_middleware(short_circuit)
        .build()
    )

    with pytest.raises(HandlerNotFoundError, match="No handler registered"):
        bus.execute(Pong())
    assert calls == []


def test_middleware_may_replace_the_command() -> None:
    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_command_handler(UpgradeHandler())
        .register_middleware(upgrade)
        .build()
    )

    assert bus.execute(Ping()) == "upgraded"


def test_middleware_errors_propagate() -> None:
    def explode(message, next_handler):
        raise RuntimeError("middleware failed")

    bus = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_middleware(explode)
        .build()
    )

    with pytest.raises(RuntimeError, match="middleware failed"):
        bus.execute(Ping())


def test_non_callable_middleware_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="is not callable"):
        BusBuilder().register_middleware(object())  # type: ignore[arg-type]


# --- Build-time validation ---


def test_duplicate_handlers_on_one_object() -> None:
    with pytest.raises(DuplicateHandlerError) as exc_info:
        BusBuilder().register_command_handler(TwoPingHandlers()).build()

    assert exc_info.value.command_type is Ping


def test_duplicate_handlers_across_objects() -> None:
    builder = (
        BusBuilder()
        .register_command_handler(PingHandler())
        .register_command_handler(AnotherPingHandler())
    )

    with pytest.raises(DuplicateHandlerError, match="AnotherPingHandler.handle"):
        builder.build()


def test_same_object_registered_twice_is_a_duplicate() -> None:
    ping_handler = PingHandler()

    with pytest.raises(DuplicateHandlerError):
        BusBuilder().register_command_handlers(ping_handler, ping_handler).build()


def test_duplicate_default_named_providers() -> None:
    with pytest.raises(DuplicateProviderError, match="int 'value'"):
        BusBuilder().register_value_provider(DefaultNamedInts()).build()


def test_missing_provider_fails_build() -> None:
    with pytest.raises(ProviderNotFoundError, match="LimitHandler.handle requires"):
        BusBuilder().register_command_handler(LimitHandler()).build()


def test_unmatched_name_among_several_providers_fails_build() -> None:
    with pytest.raises(ProviderNotFoundError, match="available names: a, b"):
        (
            BusBuilder()
            .register_command_handler(LimitHandler())
            .register_value_provider(AB())
            .build()
        )


def test_empty_bus_handles_nothing() -> None:
    bus = BusBuilder().build()

    assert bus.registered_commands() == ()
    with pytest.raises(HandlerNotFoundError):
        bus.execute(Ping())


# --- Builder and bus lifecycle ---


def test_builder_can_build_independent_buses() -> None:
    builder = BusBuilder().register_command_handler(PingHandler())
    first = builder.build()

    builder.register_command_handler(UpgradeHandler())
    second = builder.build()

    assert not first.handles(Upgrade)
    assert second.handles(Upgrade)
    assert first.execute(Ping()) == second.execute(Ping()) == 5


def test_bus_is_immutable() -> None:
    bus = BusBuilder().register_command_handler(PingHandler()).build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        bus.handlers = {}  # type: ignore[misc]
    with pytest.raises(TypeError):
        bus.handlers[Pong] = bus.handlers[Ping]  # type: ignore[index]


def test_introspection() -> None:
    bus = BusBuilder().register_command_handler(PingPongHandler()).build()

    assert isinstance(bus, Bus)
    assert isinstance(bus, ICommandBus)
    assert bus.middlewares == ()
    assert bus.handles(Ping)
    assert not bus.handles(Upgrade)
    assert set(bus.registered_commands()) == {Ping, Pong}
    registered = bus.get_registered_handlers()
    assert registered[qualified_name(Ping)].endswith("PingPongHandler.ping")
    assert registered[qualified_name(Pong)].endswith("PingPongHandler.pong")


def test_bus_hashes_by_identity() -> None:
    builder = BusBuilder().register_command_handler(PingHandler())
    first, second = builder.build(), builder.build()

    assert len({first, second, first}) == 2
    assert first != second


def test_bulk_registration() -> None:
    bus = (
        BusBuilder()
        .register_command_handlers(LimitHandler(), UpgradeHandler())
        .register_value_providers(Limits(), Labels())
        .build()
    )

    assert bus.execute(Ping()) == 6
    assert bus.execute(Upgrade()) == "upgraded"


def test_explicit_handler_source() -> None:
    class Explicit:
        def run(self, command, limit):
            return limit * 10

        def command_handlers(self):
            return [
                HandlerDescriptor(
                    self, self.run, Ping, (TypeNamePair(int, "limit"),)
                )
            ]

    bus = (
        BusBuilder()
        .register_command_handler(Explicit())
        .register_value_provider(Limits())
        .build()
    )

    assert bus.execute(Ping()) == 60


def test_build_is_logged(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="commandus.bus.builder")

    BusBuilder().register_command_handler(PingHandler()).build()

    assert "Built bus: 1 handler(s), 0 provider(s), 0 middleware" in caplog.text
