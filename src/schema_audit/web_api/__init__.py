"""
Schema Audit Web API
====================
HTTP surface over ``schema_audit.api.validate``.

Install with the ``api`` extra:
    pip install schema-audit[api]
"""
