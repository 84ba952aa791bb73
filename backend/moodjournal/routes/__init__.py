"""
MoodJournal Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - formatting.py: POST /api/formatting/encode   (styled text → spans)
                     POST /api/formatting/decode   (content + spans → styled text)
    - stats.py:      POST /api/stats/weekly        (per-week note counts)
                     POST /api/stats/streak        (longest and current streak)
                     POST /api/stats/summary       (all profile statistics)
    - health.py:     GET  /health                  (service health check)

Routes are thin: they unpack the request, call a service, and wrap the
result. No computation happens here.
"""
