# Middleware package init
"""
Programmers Backend — Middleware Package
==========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [XSRF] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line carries the correlation ID
    2. Logging wraps XSRF so rejected (403) requests are logged too
    3. XSRF rejects forged mutating requests before any body is read
"""
