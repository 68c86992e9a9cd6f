import asyncio
import logging

import pytest
from conftest import FakeGenerator, FakeLookup, FakeModerator, matches_json

from role_model_matcher.errors import SafetyRejection


def test_nodes_run_in_order(caplog, build_workflow) -> None:
    workflow = build_workflow(generator=FakeGenerator(matches_json(("Paul Farmer", "Paul_Farmer"))))

    with caplog.at_level(logging.INFO):
        result = asyncio.run(workflow.run("I want to help cure diseases and run a health nonprofit someday."))

    assert [match.name for match in result.matches] == ["Paul Farmer"]
    messages = [record.getMessage() for record in caplog.records]
    assert messages.index("safety") < messages.index("generate") < messages.index("enrich")


def test_flagged_input_never_reaches_generation(build_workflow) -> None:
    moderator = FakeModerator(flagged=True, categories={"violence": True})
    generator = FakeGenerator(matches_json(("A", "A")))
    lookup = FakeLookup()
    workflow = build_workflow(moderator=moderator, generator=generator, lookup=lookup)

    with pytest.raises(SafetyRejection) as excinfo:
        asyncio.run(workflow.run("some harmful plan described in enough detail", stage="adult"))

    assert excinfo.value.categories == {"violence": True}
    assert moderator.calls == ["adult\nsome harmful plan described in enough detail"]
    assert generator.calls == []
    assert lookup.calls == []


def test_only_first_three_candidates_are_enriched(build_workflow) -> None:
    lookup = FakeLookup()
    generator = FakeGenerator(matches_json(("A", "A_"), ("B", "B_"), ("C", "C_"), ("D", "D_")))
    workflow = build_workflow(generator=generator, lookup=lookup)

    result = asyncio.run(workflow.run("I want to lead a team that builds satellites."))

    assert lookup.calls == ["A_", "B_", "C_"]
    assert [match.name for match in result.matches] == ["A", "B", "C"]


def test_zero_candidates_returns_empty_matches(build_workflow) -> None:
    lookup = FakeLookup()
    workflow = build_workflow(generator=FakeGenerator('{"matches": []}'), lookup=lookup)

    result = asyncio.run(workflow.run("I want to open a bakery that trains refugees."))

    assert result.candidates == []
    assert result.matches == []
    assert lookup.calls == []
