"""
Student API — Routes Package
=============================

Route Inventory:
    - root.py:      GET  /                    (plain-text banner)
    - health.py:    GET  /health              (store connectivity)
    - auth.py:      POST /auth/register, POST /auth/login
    - students.py:  GET/POST /students, GET/PUT/DELETE /students/{id}
    - courses.py:   GET/POST /courses,  GET/PUT/DELETE /courses/{id}

Routes are thin: pull the body and path id, hand them to a service, pick
the success status. Failures are raised and mapped in main.py.
"""
