# Middleware package init
"""
CarValue Backend — Middleware Package
=======================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [Session] → [CORS] → Route Handler

    1. Request ID first so every later log line can carry it
    2. Logging measures the full duration including session decoding
    3. Session (Starlette SessionMiddleware) decodes/encodes the signed cookie
    4. CORS handles preflight requests from the frontend
"""
