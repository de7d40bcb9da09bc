# Routes package init
"""
CarValue Backend — API Routes Package
=======================================

Route Inventory:
    - auth.py:     /auth/...     signup, signin, signout, whoami, user CRUD
    - reports.py:  /reports/...  submit, approve, estimate, read back
    - health.py:   GET /health   service health check
    - deps.py:     session-backed current user and auth/admin guards

Routes stay THIN: they read the request, call a service, and shape the
response. Business rules live in carvalue.services.
"""
