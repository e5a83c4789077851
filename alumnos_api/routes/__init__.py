# Routes package init
"""
Alumnos API: API Routes Package
=================================

Route Inventory:
    - students.py:  GET/POST {prefix}, GET/PUT/DELETE {prefix}/{id}
                    mounted at /dalumn and /Alumno
    - docs.py:      GET /options (raw API description document)
    - uploads.py:   POST /upload (multipart field "archivo")
    - health.py:    GET /health

Routes stay thin: extract the request data, call the repository or
service, shape the response. Errors are raised and left to the global
exception handlers in main.py.
"""
