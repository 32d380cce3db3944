"""
Programmers Backend — Programmer Service Unit Tests
=====================================================

What:  Tests for ProgrammerService business logic (list, get, create, update, delete).
How:   Uses mock DB sessions (no real DB); the HTTP round trip lives in
       test_programmers_api.py.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, FieldValidationError, NotFoundError
from app.models.programmer import Programmer
from app.services.programmer_service import ProgrammerService


def _programmer(data):
    programmer = MagicMock(spec=Programmer)
    for key, value in data.items():
        setattr(programmer, key, value)
    return programmer


def _found(mock_db_session, programmer):
    result = MagicMock()
    result.scalar_one_or_none.return_value = programmer
    mock_db_session.execute.return_value = result


class TestProgrammerServiceCreate:

    def setup_method(self):
        self.service = ProgrammerService()

    @pytest.mark.asyncio
    async def test_create_hashes_password(self, mock_db_session):
        with patch("app.services.programmer_service.hash_password", return_value="HASHED") as mock_hash:
            programmer = await self.service.create_programmer(
                mock_db_session,
                {"name": "Ada", "experience": "3", "password": "secret1"},
            )

        mock_hash.assert_called_once_with("secret1")
        assert programmer.password_hash == "HASHED"
        assert programmer.name == "Ada"
        assert programmer.experience == 3.0
        mock_db_session.add.assert_called_once_with(programmer)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_hashes_in_threadpool(self, mock_db_session):
        with patch(
            "app.services.programmer_service.run_in_threadpool",
            new=AsyncMock(return_value="HASHED"),
        ) as mock_pool:
            programmer = await self.service.create_programmer(
                mock_db_session,
                {"name": "Ada", "experience": 3, "password": "secret1"},
            )

        mock_pool.assert_awaited_once()
        assert mock_pool.await_args.args[1] == "secret1"
        assert programmer.password_hash == "HASHED"

    @pytest.mark.asyncio
    async def test_create_missing_fields_reports_every_field(self, mock_db_session):
        with pytest.raises(FieldValidationError) as exc_info:
            await self.service.create_programmer(mock_db_session, {})

        assert exc_info.value.errors == {
            "name": ["Name cannot be blank."],
            "experience": ["Experience cannot be blank."],
            "password": ["Password cannot be blank."],
        }
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_rejects_non_numeric_experience(self, mock_db_session):
        with pytest.raises(FieldValidationError) as exc_info:
            await self.service.create_programmer(
                mock_db_session,
                {"name": "Ada", "experience": "ten", "password": "secret1"},
            )
        assert exc_info.value.errors == {"experience": ["Experience must be a number."]}

    @pytest.mark.asyncio
    async def test_create_wraps_database_errors(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_programmer(
                mock_db_session,
                {"name": "Ada", "experience": 3, "password": "secret1"},
            )


class TestProgrammerServiceGet:

    def setup_method(self):
        self.service = ProgrammerService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session, sample_programmer_data):
        existing = _programmer(sample_programmer_data)
        _found(mock_db_session, existing)

        result = await self.service.get_programmer(mock_db_session, 1)

        assert result is existing

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_db_session):
        _found(mock_db_session, None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_programmer(mock_db_session, 42)
        assert exc_info.value.context["resource_id"] == "42"

    @pytest.mark.asyncio
    async def test_get_out_of_range_id_skips_query(self, mock_db_session):
        for programmer_id in (0, -1, 2**31, 10**23):
            with pytest.raises(NotFoundError):
                await self.service.get_programmer(mock_db_session, programmer_id)

        mock_db_session.execute.assert_not_awaited()


class TestProgrammerServiceUpdate:

    def setup_method(self):
        self.service = ProgrammerService()

    @pytest.mark.asyncio
    async def test_put_without_password_keeps_hash(self, mock_db_session, sample_programmer_data):
        existing = _programmer(sample_programmer_data)
        _found(mock_db_session, existing)

        with patch("app.services.programmer_service.hash_password") as mock_hash:
            result = await self.service.update_programmer(
                mock_db_session, 1, {"name": "Grace", "experience": 30}
            )

        mock_hash.assert_not_called()
        assert result.name == "Grace"
        assert result.experience == 30.0
        assert result.password_hash == sample_programmer_data["password_hash"]

    @pytest.mark.asyncio
    async def test_put_with_password_rehashes(self, mock_db_session, sample_programmer_data):
        existing = _programmer(sample_programmer_data)
        _found(mock_db_session, existing)

        with patch("app.services.programmer_service.hash_password", return_value="NEW"):
            result = await self.service.update_programmer(
                mock_db_session, 1, {"name": "Grace", "experience": 30, "password": "another1"}
            )

        assert result.password_hash == "NEW"

    @pytest.mark.asyncio
    async def test_put_requires_name_and_experience(self, mock_db_session, sample_programmer_data):
        _found(mock_db_session, _programmer(sample_programmer_data))

        with pytest.raises(FieldValidationError) as exc_info:
            await self.service.update_programmer(mock_db_session, 1, {"password": "another1"})

        assert set(exc_info.value.errors) == {"name", "experience"}

    @pytest.mark.asyncio
    async def test_patch_applies_only_supplied_fields(self, mock_db_session, sample_programmer_data):
        existing = _programmer(sample_programmer_data)
        _found(mock_db_session, existing)

        result = await self.service.update_programmer(
            mock_db_session, 1, {"experience": 13}, partial=True
        )

        assert result.experience == 13.0
        assert result.name == sample_programmer_data["name"]

    @pytest.mark.asyncio
    async def test_update_missing_record(self, mock_db_session):
        _found(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.update_programmer(
                mock_db_session, 9, {"name": "Grace", "experience": 1}
            )


class TestProgrammerServiceList:

    def setup_method(self):
        self.service = ProgrammerService()

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session):
        rows = MagicMock()
        rows.scalars.return_value.all.return_value = []
        count = MagicMock()
        count.scalar.return_value = 0
        mock_db_session.execute = AsyncMock(side_effect=[rows, count])

        programmers, total = await self.service.list_programmers(mock_db_session)

        assert programmers == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_list_with_results(self, mock_db_session, sample_programmer_data):
        rows = MagicMock()
        rows.scalars.return_value.all.return_value = [_programmer(sample_programmer_data)]
        count = MagicMock()
        count.scalar.return_value = 7
        mock_db_session.execute = AsyncMock(side_effect=[rows, count])

        programmers, total = await self.service.list_programmers(mock_db_session, limit=1)

        assert len(programmers) == 1
        assert total == 7


class TestProgrammerServiceDelete:

    def setup_method(self):
        self.service = ProgrammerService()

    @pytest.mark.asyncio
    async def test_delete(self, mock_db_session, sample_programmer_data):
        existing = _programmer(sample_programmer_data)
        _found(mock_db_session, existing)

        await self.service.delete_programmer(mock_db_session, 1)

        mock_db_session.delete.assert_awaited_once_with(existing)

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db_session):
        _found(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.delete_programmer(mock_db_session, 1)
        mock_db_session.delete.assert_not_awaited()
