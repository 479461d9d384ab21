"""Tests for the CLI entry point.

pip-generated console_scripts wrappers call the target function directly, so
the entry point must be a sync `run()` that calls `asyncio.run(main())`. An
`async def` target would return a coroutine object instead of starting the
server.
"""

import asyncio
import inspect
import importlib.metadata

import pytest


def test_run_is_not_a_coroutine_function():
    """run() must be a regular sync function, not async def."""
    from cosmic_wealth_mcp.server import run
    assert not inspect.iscoroutinefunction(run), (
        "run() is async, but pip entry points call it directly without await"
    )


def test_main_is_a_coroutine_function():
    """main() stays async; run() wraps it with asyncio.run()."""
    from cosmic_wealth_mcp.server import main
    assert inspect.iscoroutinefunction(main)


def test_calling_run_does_not_return_coroutine(monkeypatch):
    """Call run() exactly as a console script would, with asyncio.run patched."""
    import cosmic_wealth_mcp.server as server_module

    called_with_coroutine = []

    def fake_asyncio_run(coro):
        called_with_coroutine.append(inspect.iscoroutine(coro))
        # Close the coroutine cleanly to avoid ResourceWarning
        coro.close()

    monkeypatch.setattr(asyncio, "run", fake_asyncio_run)

    result = server_module.run()

    assert result is None
    assert called_with_coroutine == [True], (
        "run() should have passed a coroutine to asyncio.run()"
    )


def test_pyproject_entry_point_targets_run():
    """[project.scripts] must point to server:run, read from installed metadata."""
    eps = importlib.metadata.entry_points(group="console_scripts")
    our_ep = next((ep for ep in eps if ep.name == "cosmic-wealth-mcp"), None)

    if our_ep is None:
        pytest.skip("cosmic-wealth-mcp not found in installed entry points (not installed editable?)")

    assert our_ep.value == "cosmic_wealth_mcp.server:run"
