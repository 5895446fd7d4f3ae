"""
Student API — Services Layer
=============================

What:  Business logic between routes (HTTP) and the DocumentStore.
Why:   Routes stay thin; services can be tested with an in-memory store.

Service Inventory:
    - RecordService: presence-checked CRUD for students and courses
    - UserService:   registration and login
"""
