import pytest

from editcost import StringDistanceCalculator

# This hook is a pluggy hook specification from pytest
# hookwrapper=True allows us to wrap the execution and access the result
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Extends the test report to surface better info on failure.
    """
    outcome = yield
    rep = outcome.get_result()

    # Only the actual test execution (call), not setup or teardown
    if rep.when == "call" and rep.failed:
        doc = item.obj.__doc__
        if doc:
            from inspect import cleandoc
            rep.sections.append(("Test Description", cleandoc(doc)))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and EDITCOST_* variables out of the tests."""
    for suffix in ("ADD_COST", "REMOVE_COST", "CHANGE_COST", "METHOD"):
        monkeypatch.delenv(f"EDITCOST_{suffix}", raising=False)
    monkeypatch.setattr(
        "editcost.config.DEFAULT_USER_CONFIG_PATH",
        tmp_path / "home" / ".editcost" / "config.yaml",
    )
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def calculator() -> StringDistanceCalculator:
    """Calculator with the default costs (add=1, remove=1, change=1.5)."""
    return StringDistanceCalculator()


@pytest.fixture
def unit_calculator() -> StringDistanceCalculator:
    """Calculator where every transformation costs 1."""
    return StringDistanceCalculator(add_cost=1, remove_cost=1, change_cost=1)
