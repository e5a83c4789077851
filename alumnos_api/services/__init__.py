# Services package init
"""
Alumnos API: Services Layer
=============================

What:  Data access and storage logic between routes (HTTP) and the outside world.

Service Inventory:
    - StudentRepository: parameterized statements against the DALUMN table
    - FileService: stores uploaded files under their original names

Routes never talk to the engine or the file system directly.
"""
