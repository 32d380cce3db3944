# Services package init
"""
Programmers Backend — Services Layer
======================================

Service Inventory:
    - programmer_service: CRUD + validation for Programmer records
    - password_service:   argon2 hashing of the write-only password field
    - payload:            JSON / form body decoding into one flat dict

Services never touch HTTP status codes; they raise app.exceptions types and
the handlers in main.py pick the response.
"""
