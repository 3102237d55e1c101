"""Tests for the algorithm registry."""

from __future__ import annotations

import threading

from signing_service.crypto import AlgorithmRegistry, ECCAlgorithm, RSAAlgorithm


def test_register_and_resolve() -> None:
    """Test that a registered algorithm resolves by its name."""
    registry = AlgorithmRegistry()
    algorithm = RSAAlgorithm()

    registry.register("RSA", algorithm)

    assert registry.resolve("RSA") is algorithm
    assert registry.resolve("ECC") is None


def test_register_replaces_existing_binding() -> None:
    """Test that registering a name twice keeps the latest algorithm."""
    registry = AlgorithmRegistry()
    first = RSAAlgorithm()
    second = ECCAlgorithm()

    registry.register("scheme", first)
    registry.register("scheme", second)

    assert registry.resolve("scheme") is second
    assert registry.names() == ["scheme"]


def test_lookup_is_case_sensitive() -> None:
    """Test that names match exactly, with no case folding."""
    registry = AlgorithmRegistry()
    registry.register("ECC", ECCAlgorithm())

    assert registry.resolve("ECC") is not None
    assert registry.resolve("ecc") is None
    assert registry.resolve("Ecc") is None


def test_default_registry_uses_lowercase_names() -> None:
    """Test the algorithms preloaded by AlgorithmRegistry.default()."""
    registry = AlgorithmRegistry.default()

    assert registry.names() == ["ecc", "rsa"]
    assert isinstance(registry.resolve("rsa"), RSAAlgorithm)
    assert isinstance(registry.resolve("ecc"), ECCAlgorithm)
    assert registry.resolve("RSA") is None


def test_registries_are_independent() -> None:
    """Test that separately constructed registries share no state."""
    first = AlgorithmRegistry()
    second = AlgorithmRegistry()

    first.register("rsa", RSAAlgorithm())

    assert second.resolve("rsa") is None


def test_concurrent_register_and_resolve() -> None:
    """Test that concurrent writers and readers never observe a broken mapping."""
    registry = AlgorithmRegistry()
    algorithm = ECCAlgorithm()
    errors: list[BaseException] = []
    start = threading.Event()

    def writer(index: int) -> None:
        start.wait()
        for n in range(200):
            registry.register(f"w{index}-{n}", algorithm)

    def reader() -> None:
        start.wait()
        try:
            for _ in range(200):
                for name in registry.names():
                    assert registry.resolve(name) is algorithm
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    start.set()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(registry.names()) == 800
