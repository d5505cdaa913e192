"""
Tests for role-scoped view routing.
"""

import pytest

from shared.config.constants import Roles
from shared.security.routing import can_view, landing_route, resolve_route


class TestLandingRoutes:
    @pytest.mark.parametrize(
        "role,expected",
        [
            (Roles.CICLO_BASICO, "/menu"),
            (Roles.CICLO_SUPERIOR, "/menu"),
            (Roles.KIOSQUERO, "/kiosco/dashboard"),
            (Roles.ADMIN, "/admin/users"),
        ],
    )
    def test_landing_route(self, role, expected):
        assert landing_route(role) == expected


class TestResolveRoute:
    def test_student_keeps_allowed_path(self):
        assert resolve_route(Roles.CICLO_BASICO, "/cart") == "/cart"

    def test_student_redirected_from_kiosk_view(self):
        assert resolve_route(Roles.CICLO_SUPERIOR, "/kiosco/dashboard") == "/menu"

    def test_kiosk_redirected_from_menu(self):
        assert resolve_route(Roles.KIOSQUERO, "/menu") == "/kiosco/dashboard"

    def test_admin_redirected_from_kiosk_view(self):
        assert resolve_route(Roles.ADMIN, "/kiosco/inventory") == "/admin/users"

    def test_unknown_path_goes_to_landing(self):
        assert resolve_route(Roles.CICLO_BASICO, "/does-not-exist") == "/menu"

    def test_root_goes_to_landing(self):
        assert resolve_route(Roles.KIOSQUERO, "/") == "/kiosco/dashboard"

    def test_order_confirmation_with_id(self):
        assert resolve_route(Roles.CICLO_BASICO, "/order-confirmation/ORD-123456") == (
            "/order-confirmation/ORD-123456"
        )

    def test_trailing_slash_and_query_normalized(self):
        assert can_view(Roles.CICLO_BASICO, "/orders/?page=2")

    def test_kiosk_views(self):
        for path in ("/kiosco/dashboard", "/kiosco/inventory", "/kiosco/analytics"):
            assert can_view(Roles.KIOSQUERO, path)
            assert not can_view(Roles.CICLO_BASICO, path)
