# Routes package init
"""
Daily Diet Backend: API Routes Package
========================================

Route Inventory:
    - users.py:   GET  /users               (liveness text)
                  POST /users               (register, issue session cookie)
    - meals.py:   POST /meals               (create)
                  GET  /meals               (list, newest date_time first)
                  GET  /meals/metrics       (aggregate diet metrics)
                  GET  /meals/{id}          (detail)
                  PUT  /meals/{id}          (replace)
                  DELETE /meals/{id}        (delete)
    - health.py:  GET  /health              (service health check)

Routes stay thin: they extract input, resolve the session user through
dependencies, call a service and return its response model.
"""
