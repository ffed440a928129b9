# Routes package init
"""
TxtStore — API Routes Package
==============================

Route Inventory:
    - health.py:   GET    /              (liveness greeting)
                   GET    /health        (readiness, pings the store)
    - records.py:  GET    /txt           (list records)
                   POST   /txt           (create a record)
                   DELETE /txt/{id}      (delete a record)

Routes stay thin: extract input, make one Record Store call, serialize.
"""
