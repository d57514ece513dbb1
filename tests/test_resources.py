"""Tests for the resource registry (app/resources.py)."""

from __future__ import annotations

import pytest

from app.resources import ResourceRegistry, StaleHandleError


class TestResourceRegistry:
    def test_acquire_registers_handle(self):
        registry = ResourceRegistry()
        handle = registry.acquire(b"abc", "audio/mpeg")
        assert handle.key.startswith("blob:")
        assert handle.data == b"abc"
        assert handle.size == 3
        assert handle in registry
        assert registry.get(handle.key) is handle
        assert len(registry) == 1

    def test_keys_are_unique(self):
        registry = ResourceRegistry()
        keys = {registry.acquire(b"").key for _ in range(20)}
        assert len(keys) == 20

    def test_release_exactly_once(self):
        registry = ResourceRegistry()
        handle = registry.acquire(b"abc")
        assert registry.release(handle) is True
        assert registry.release(handle) is False
        assert registry.released_count == 1
        assert handle.released
        assert handle not in registry

    def test_released_handle_is_stale(self):
        registry = ResourceRegistry()
        handle = registry.acquire(b"abc")
        registry.release(handle)
        with pytest.raises(StaleHandleError, match="already been released"):
            handle.data

    def test_release_all(self):
        registry = ResourceRegistry()
        handles = [registry.acquire(b"x") for _ in range(3)]
        registry.release(handles[0])
        assert registry.release_all() == 2
        assert len(registry) == 0
        assert registry.acquired_count == registry.released_count == 3

    def test_repr_shows_state(self):
        registry = ResourceRegistry()
        handle = registry.acquire(b"x")
        assert "live" in repr(handle)
        registry.release(handle)
        assert "released" in repr(handle)
