"""
ShopDesk Backend: API Routes Package
====================================

Route Inventory:
    - products.py:  GET  /products, GET /getInventory, GET /product/{id},
                    GET  /image/{id}, POST /addProduct,
                    PUT  /updateProduct/{id}, DELETE /deleteProduct/{id}
    - users.py:     POST /register, POST /login
    - bills.py:     GET  /getBills
    - pages.py:     GET  /  (HTML entry page)

Routes handle HTTP concerns only and delegate to a service. Errors are
raised as ShopDeskError subclasses and formatted by the handlers in main.py.
"""
