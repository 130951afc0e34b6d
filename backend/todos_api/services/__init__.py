# Services package init
"""
Todos API: Services Layer
==========================

What:  Business logic sitting between routes (HTTP) and the in-memory data.
How:   Services accept plain values, apply the coercion and validation rules,
       and return models or raise application exceptions.

Service Inventory:
    - TodoStore: ordered in-memory collection of todo records with the CRUD,
      toggle and completion operations
"""
