# Services package init
"""
Daily Diet Backend: Services Layer
====================================

What:  Query layer between routes (HTTP) and the database.

Service Inventory:
    - UserService: registration and session-token lookup
    - MealService: owner-scoped meal CRUD and diet metrics
"""
