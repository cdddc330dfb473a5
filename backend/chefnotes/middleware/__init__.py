# Middleware package init
"""
ChefNotes Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Conversion Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    - Request ID first so the rate limiter's 429 body and every log line carry it
    - Rate limit only inspects POST .../convert-to-recipe
    - Logging measures everything downstream, including the Gemini call
"""
