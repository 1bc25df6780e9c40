from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from puzzle_api.app import create_app
from puzzle_api.config import Settings
from puzzle_api.db import models as _models

del _models


def _test_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "app_name": "Puzzle Leagues API (Test)",
        "app_env": "test",
        "app_docs_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)


class TestApiHealth(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _get_ready(self, engine: AsyncEngine):
        self.addCleanup(lambda: asyncio.run(engine.dispose()))
        client = TestClient(create_app(settings=_test_settings()))
        with patch("puzzle_api.modules.health.router.get_engine", return_value=engine):
            return client.get("/health/ready")

    def test_health_endpoint_returns_ok(self) -> None:
        client = TestClient(create_app(settings=_test_settings()))

        response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"status": "ok", "app": "Puzzle Leagues API (Test)", "env": "test"},
        )

    def test_docs_disabled_hides_docs_routes(self) -> None:
        client = TestClient(create_app(settings=_test_settings()))
        self.assertEqual(client.get("/docs").status_code, 404)
        self.assertEqual(client.get("/redoc").status_code, 404)

    def test_ready_endpoint_returns_ready_for_migrated_database(self) -> None:
        engine = create_async_engine(f"sqlite+aiosqlite:///{Path(self.tmpdir.name) / 'ready.db'}")

        async def _init_db() -> None:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        asyncio.run(_init_db())
        response = self._get_ready(engine)

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "ready")
        self.assertEqual(payload["checks"], {"database": True, "schema": True})

    def test_ready_endpoint_returns_503_when_tables_are_missing(self) -> None:
        engine = create_async_engine(f"sqlite+aiosqlite:///{Path(self.tmpdir.name) / 'empty.db'}")

        with self.assertLogs("puzzle_api.modules.health.router", level="WARNING") as captured:
            response = self._get_ready(engine)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["detail"], "Store not ready: schema")
        self.assertEqual(
            getattr(captured.records[0], "missing_tables", None),
            ["league", "player", "membership", "score"],
        )

    def test_ready_endpoint_returns_503_when_database_is_unreachable(self) -> None:
        unreachable = Path(self.tmpdir.name) / "no-such-dir" / "ready.db"
        engine = create_async_engine(f"sqlite+aiosqlite:///{unreachable}")

        with self.assertLogs("puzzle_api.modules.health.router", level="WARNING") as captured:
            response = self._get_ready(engine)

        self.assertEqual(response.status_code, 503)
        payload = response.json()
        self.assertEqual(payload["error_code"], "service_unavailable")
        self.assertEqual(payload["detail"], "Store not ready: database, schema")
        self.assertEqual(getattr(captured.records[0], "error_type", None), "OperationalError")

    def test_cors_headers_are_present_when_origins_configured(self) -> None:
        app = create_app(settings=_test_settings(app_cors_origins=["http://localhost:5173"]))
        client = TestClient(app)

        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.headers.get("access-control-allow-origin"),
            "http://localhost:5173",
        )

    def test_request_logging_emits_request_log(self) -> None:
        app = create_app(settings=_test_settings(app_log_requests=True, app_log_json=False))
        client = TestClient(app)

        with self.assertLogs("puzzle_api.request", level="INFO") as captured:
            response = client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertIn("request_completed", "\n".join(captured.output))


if __name__ == "__main__":
    unittest.main()
