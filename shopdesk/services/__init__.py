"""
ShopDesk Backend: Services Layer
================================

What:  Business logic between routes (HTTP) and the store (persistence).

Service Inventory:
    - UploadService: request body → fields + optional image bytes
    - ProductService: catalog listing, lookup and writes
    - UserService: registration and login
    - BillService: bills listing

Services receive the request's AsyncSession as an argument and keep no
state between calls, so each is exposed as a module-level instance.
"""
