# Routes package init
"""
Programmers Backend — Routes Package
======================================

Route Inventory:
    - programmers.py:  /api/programmers[.json][/{id}[.json]]   (resource controller)
    - pages.py:        GET /                                   (Angular.js page shell)
    - health.py:       GET /health                             (service health check)

Routes stay thin: read the request, call a service, shape the response.
"""
