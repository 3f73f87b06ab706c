"""
Storefront feature modules.

Every module follows the same layout: interfaces.py (Protocols other
modules depend on), models.py, exceptions.py, repository.py (Supabase and
in-memory stores), service.py and routes.py. Cross-module calls go through
the interfaces; api/dependencies.py wires the concrete classes.
"""
