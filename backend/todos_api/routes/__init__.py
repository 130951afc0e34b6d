# Routes package init
"""
Todos API: API Routes Package
==============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - todos.py:   GET    /todos                (list, ?limit & ?userId)
                  GET    /todos/{id}           (single todo)
                  POST   /todos                (create)
                  PUT    /todos/{id}           (update supplied fields)
                  PATCH  /todos/{id}           (update supplied fields)
                  DELETE /todos/{id}           (delete)
                  POST   /todos/{id}/toggle    (flip completed)
                  POST   /todos/{id}/complete  (set completed)
    - status.py:  GET    /status               (diagnostics)
                  GET    /                     (banner)

Design Principle:
    Routes are THIN. They extract path, query and body values, call one
    TodoStore operation, and wrap the result. Validation and lookups live
    in the store.
"""
