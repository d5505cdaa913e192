"""
Application services.

- domain/: cart, orders, products and analytics business logic
"""
