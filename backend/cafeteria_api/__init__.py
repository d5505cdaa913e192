"""
Kiosco Escolar REST API.

School cafeteria ordering service: students build a cart and place pickup
orders for a break slot; kiosk staff move orders through preparation,
manage inventory and read daily analytics.
"""
