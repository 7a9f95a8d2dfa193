from __future__ import annotations

import pytest

from crud_gateway.results import STATUS_BY_KIND, Err, ErrorKind, Ok, capture


async def _returns(value):
    return value


async def _raises(exc):
    raise exc


@pytest.mark.asyncio
async def test_capture_wraps_value_in_ok():
    outcome = await capture(_returns({"a": 1}))
    assert outcome == Ok({"a": 1})


@pytest.mark.asyncio
async def test_capture_turns_exception_into_dependency_err():
    boom = RuntimeError("store unavailable")
    outcome = await capture(_raises(boom))

    assert isinstance(outcome, Err)
    assert outcome.kind is ErrorKind.DEPENDENCY
    assert outcome.message == "store unavailable"
    assert outcome.error is boom
    assert outcome.status_code == 500


def test_status_table_covers_every_kind():
    assert STATUS_BY_KIND == {
        ErrorKind.VALIDATION: 400,
        ErrorKind.NOT_FOUND: 404,
        ErrorKind.DEPENDENCY: 500,
    }
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_err_constructors():
    assert Err.validation("x").status_code == 400
    assert Err.not_found("y").status_code == 404
    assert Err.not_found("y").error is None
