"""
Tests for the terminal client.
"""

import pytest
from typer.testing import CliRunner

import cli
from shared.config.constants import StoreSlots
from shared.infrastructure.session_store import JsonFileSessionStore

runner = CliRunner()


@pytest.fixture
def profile(tmp_path):
    return JsonFileSessionStore(tmp_path / "profile.json")


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, local_only, profile):
    monkeypatch.setattr(cli, "_persistence", lambda: local_only)
    monkeypatch.setattr(cli, "_profile", lambda: JsonFileSessionStore(profile.path))
    result = runner.invoke(cli.app, ["seed"])
    assert result.exit_code == 0, result.output


def _login(email):
    result = runner.invoke(cli.app, ["login", email, "--password", "demo123"])
    assert result.exit_code == 0, result.output


class TestSession:
    def test_login_stores_current_user(self, profile):
        _login("usuario@ciclobasico.com")

        user = JsonFileSessionStore(profile.path).get(StoreSlots.CURRENT_USER)
        assert user["role"] == "ciclo_basico"

    def test_login_wrong_password(self):
        result = runner.invoke(cli.app, ["login", "usuario@admin.com", "--password", "nope"])
        assert result.exit_code == 1

    def test_logout(self, profile):
        _login("usuario@ciclobasico.com")
        runner.invoke(cli.app, ["logout"])

        assert JsonFileSessionStore(profile.path).get(StoreSlots.CURRENT_USER) is None
        assert runner.invoke(cli.app, ["whoami"]).exit_code == 1


class TestStudentFlow:
    def test_cart_and_checkout(self, local_only):
        _login("usuario@ciclosuperior.com")

        assert runner.invoke(cli.app, ["cart", "add", "6", "-q", "2"]).exit_code == 0
        assert runner.invoke(cli.app, ["cart", "add", "1", "-i", "lechuga", "-c", "sal"]).exit_code == 0

        result = runner.invoke(cli.app, ["checkout", "--pickup", "17:15"])
        assert result.exit_code == 0, result.output

        orders = local_only.list_orders(user_id="2")
        assert len(orders) == 1
        assert orders[0].total_amount == 300 * 2 + 850
        assert runner.invoke(cli.app, ["orders"]).exit_code == 0

    def test_checkout_invalid_slot(self):
        _login("usuario@ciclobasico.com")
        runner.invoke(cli.app, ["cart", "add", "6"])

        result = runner.invoke(cli.app, ["checkout", "--pickup", "19:35"])
        assert result.exit_code == 1

    def test_checkout_invalid_payment(self):
        _login("usuario@ciclobasico.com")
        runner.invoke(cli.app, ["cart", "add", "6"])

        assert runner.invoke(cli.app, ["checkout", "-p", "9:35", "--payment", "bitcoin"]).exit_code == 1


class TestKioskFlow:
    def test_advance_and_cancel(self, local_only):
        _login("usuario@ciclobasico.com")
        runner.invoke(cli.app, ["cart", "add", "6"])
        runner.invoke(cli.app, ["checkout", "-p", "9:35"])
        order_id = local_only.list_orders()[0].id

        _login("usuario@kiosquero.com")
        assert runner.invoke(cli.app, ["kiosk", "orders"]).exit_code == 0
        assert runner.invoke(cli.app, ["kiosk", "advance", order_id]).exit_code == 0
        assert runner.invoke(cli.app, ["kiosk", "cancel", order_id]).exit_code == 0
        assert local_only.get_order(order_id).status.value == "cancelado"

    def test_student_cannot_use_kiosk_commands(self):
        _login("usuario@ciclobasico.com")
        assert runner.invoke(cli.app, ["kiosk", "orders"]).exit_code == 1
