"""Tests for the request-scoped database session dependency."""

import asyncio
from types import SimpleNamespace

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from urbanliving.core.exceptions import DatabaseException
from urbanliving.models import Branding
from urbanliving.services.database import (
    build_engine,
    build_session_factory,
    get_db,
    init_models,
)

pytestmark = pytest.mark.unit


def run_with_session(settings, body):
    """Drive ``get_db`` the way FastAPI does, feeding ``body``'s error back in."""

    async def run():
        engine = build_engine(settings)
        await init_models(engine)
        factory = build_session_factory(engine)
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(session_factory=factory)))
        try:
            dependency = get_db(request)
            session = await dependency.__anext__()
            try:
                await body(session)
            except Exception as e:
                await dependency.athrow(e)
            else:
                with pytest.raises(StopAsyncIteration):
                    await dependency.__anext__()

            async with factory() as check:
                result = await check.execute(select(Branding))
                return result.scalars().all()
        finally:
            await engine.dispose()

    return asyncio.run(run())


def test_commits_on_success(settings):
    async def body(session):
        session.add(Branding(company_name="UrbanLiving"))

    rows = run_with_session(settings, body)
    assert [row.company_name for row in rows] == ["UrbanLiving"]


def test_database_error_becomes_generic_500(settings):
    async def body(session):
        session.add(Branding(company_name="Never saved"))
        await session.flush()
        raise OperationalError("UPDATE branding", {}, Exception("disk I/O error"))

    with pytest.raises(DatabaseException) as exc_info:
        run_with_session(settings, body)

    assert exc_info.value.status_code == 500
    assert "disk I/O" not in exc_info.value.message


def test_other_errors_propagate_unchanged(settings):
    async def body(session):
        raise KeyError("boom")

    with pytest.raises(KeyError):
        run_with_session(settings, body)
