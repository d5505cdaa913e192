"""
API routers.

- auth: /api/auth (login, me)
- navigation: /api/routes (role-scoped view resolution)
- catalog: /api/catalog
- cart: /api/cart
- orders: /api/orders (students)
- kiosco: /api/kiosco (dashboard, inventory, analytics)
- admin: /api/admin
- public: /api/health
"""
