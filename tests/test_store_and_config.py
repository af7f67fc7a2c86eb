"""
ShopDesk Backend: Store and Configuration Tests
===============================================

What:  Schema creation on a fresh file, its idempotence, and Settings parsing.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError
from sqlalchemy import inspect, text

from shopdesk.config import Settings
from shopdesk.database import Store


class TestStoreSchema:

    @pytest.mark.asyncio
    async def test_create_schema_creates_tables(self, tmp_path):
        store = Store(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
        try:
            await store.create_schema()

            async with store.engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
                columns = await conn.run_sync(
                    lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("inventory")]
                )
        finally:
            await store.dispose()

        assert {"inventory", "users", "bills"} <= set(tables)
        assert columns == ["id", "name", "price", "stock", "unit", "category", "image"]

    @pytest.mark.asyncio
    async def test_create_schema_is_idempotent(self, tmp_path):
        store = Store(f"sqlite+aiosqlite:///{tmp_path / 'twice.db'}")
        try:
            await store.create_schema()
            async with store.engine.begin() as conn:
                await conn.execute(text("INSERT INTO bills (date, total_amount) VALUES ('2024-01-15', 9.5)"))

            await store.create_schema()

            async with store.engine.connect() as conn:
                count = (await conn.execute(text("SELECT COUNT(*) FROM bills"))).scalar_one()
        finally:
            await store.dispose()

        assert count == 1

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, tmp_path):
        store = Store(f"sqlite+aiosqlite:///{tmp_path / 'rollback.db'}")
        try:
            await store.create_schema()
            with pytest.raises(RuntimeError):
                async with store.session() as session:
                    await session.execute(
                        text("INSERT INTO bills (date, total_amount) VALUES ('2024-01-15', 1.0)")
                    )
                    raise RuntimeError("boom")

            async with store.engine.connect() as conn:
                count = (await conn.execute(text("SELECT COUNT(*) FROM bills"))).scalar_one()
        finally:
            await store.dispose()

        assert count == 0


class TestSettings:

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8081")
        assert Settings().port == 8081

    def test_port_default(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings().port == 3000

    def test_invalid_log_level(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="chatty")

    def test_log_level_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.example, http://b.example")
        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]
