"""auth/ -- Authentication and authorization package for DesignDesk.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/, projects/, catalogue/, or storage/.
api/ imports from auth/, not the other way around.
"""
